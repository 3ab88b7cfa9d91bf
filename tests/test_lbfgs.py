import numpy as np

import pytest

import jax.numpy as jnp

import funcopt
from funcopt.lbfgs import two_loop_recursion

def test_lbfgs_rosenbrock():
	function = funcopt.RosenbrockFunction()
	params = np.array([-1.2, 1.])

	optimizer = funcopt.LBFGS()
	objective = optimizer.optimize(function, params)

	assert np.allclose(params, 1., atol = 1e-3)
	assert objective == pytest.approx(0., abs = 1e-6)
	assert optimizer.logger['cost'][0] == pytest.approx(24.2)

def test_lbfgs_generalized_rosenbrock():
	function = funcopt.GeneralizedRosenbrockFunction(n = 10)
	params = np.full(10, 1.5)

	objective = funcopt.LBFGS(num_basis = 5).optimize(function, params)

	assert np.allclose(params, 1., atol = 1e-3)
	assert objective == pytest.approx(0., abs = 1e-6)

def test_lbfgs_jax_quadratic(seed):
	rng = np.random.RandomState(seed)
	A = rng.randn(5, 5)
	A = A@A.T + np.eye(5)
	b = rng.randn(5)
	function = funcopt.JaxFunction(lambda x: 0.5*x@(A@x) - b@x)

	params = np.zeros(5)
	funcopt.LBFGS(min_gradient_norm = 1e-8, factr = 10.).optimize(function, params)

	assert np.allclose(params, np.linalg.solve(A, b), atol = 1e-6)

def test_lbfgs_reports_final_iterate():
	function = funcopt.RosenbrockFunction()
	params = np.array([-1.2, 1.])
	store = funcopt.StoreBestCoordinates()

	optimizer = funcopt.LBFGS(callbacks = [store])
	objective = optimizer.optimize(function, params)

	assert optimizer.logger['cost'][-1] == pytest.approx(objective)
	assert store.best_objective == pytest.approx(objective)
	assert np.allclose(store.best_coordinates, params)

def test_lbfgs_max_iterations():
	function = funcopt.RosenbrockFunction()
	params = np.array([-1.2, 1.])

	optimizer = funcopt.LBFGS(max_iterations = 3)
	objective = optimizer.optimize(function, params)

	# the initial point plus one entry per accepted step
	assert len(optimizer.logger['cost']) == 4
	assert optimizer.logger['cost'][-1] == pytest.approx(objective)
	assert objective < 24.2
	assert objective == pytest.approx(function.evaluate(params))

def test_lbfgs_failed_line_search():
	class Cliff(funcopt.Function):
		"""Any step away from the start is infinitely worse."""

		def evaluate(self, x):
			return 0. if np.all(x == 0.) else np.inf

		def gradient(self, x):
			return np.ones_like(x)

	params = np.zeros(2)
	with pytest.warns(UserWarning, match = 'line search'):
		objective = funcopt.LBFGS(max_line_search_trials = 5).optimize(Cliff(), params)

	assert objective == 0.
	assert np.all(params == 0.)

def test_two_loop_recursion():
	grads = np.array([1., -2.])
	assert np.allclose(two_loop_recursion(grads, [], []), grads)

	# a single pair from a quadratic with Hessian diag(2, 4) recovers its inverse on that pair
	s = np.array([1., 0.])
	y = np.array([2., 0.])
	assert np.allclose(two_loop_recursion(y, [s], [y]), s)

def test_lbfgs_arguments():
	with pytest.raises(ValueError):
		funcopt.LBFGS(num_basis = 0)
	with pytest.raises(ValueError):
		funcopt.LBFGS(backtrack = 1.5)
