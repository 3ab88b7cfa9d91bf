import numpy as np

import pytest

import funcopt

def test_cmaes_parabolas(seed):
	function = funcopt.ParabolaSumFunction(seed = seed)
	params = np.array([5.])

	objective = funcopt.CMAES(batch_size = 2, seed = seed, tolerance = 1e-8).optimize(function, params)

	assert abs(params[0]) < 1e-2
	assert objective == pytest.approx(147., abs = 1e-2)

def test_cmaes_sphere(seed):
	function = funcopt.SphereFunction(n = 10, d = 5, seed = seed)
	params = np.zeros(5)

	objective = funcopt.CMAES(batch_size = 10, seed = seed, tolerance = 1e-8).optimize(function, params)

	assert np.allclose(params, function.minimiser(), atol = 1e-2)
	assert objective == pytest.approx(function.evaluate(params))

def test_cmaes_is_derivative_free(seed):
	class NoGradient(funcopt.SeparableFunction):
		def num_functions(self):
			return 3

		def evaluate(self, x, begin = 0, batch_size = None):
			end = 3 if batch_size is None else begin + batch_size
			return float(sum(np.sum((x - i)**2) for i in range(begin, end)))

	params = np.zeros(2)
	funcopt.CMAES(batch_size = 3, seed = seed, tolerance = 1e-10).optimize(NoGradient(), params)
	assert np.allclose(params, 1., atol = 1e-2)

def test_cmaes_reproducible(seed):
	function = funcopt.ParabolaSumFunction()
	first, second = np.array([5.]), np.array([5.])

	funcopt.CMAES(batch_size = 4, seed = seed, max_iterations = 10).optimize(function, first)
	funcopt.CMAES(batch_size = 4, seed = seed, max_iterations = 10).optimize(function, second)

	assert first[0] == second[0]

def test_cmaes_arguments():
	with pytest.raises(ValueError):
		funcopt.CMAES(lower_bound = 1., upper_bound = -1.)

def test_cmaes_without_shuffle(seed):
	class Shifted(object):
		"""Two components and no way to reorder them."""

		def num_functions(self):
			return 2

		def evaluate(self, x, begin = 0, batch_size = None):
			count = 2 - begin if batch_size is None else batch_size
			return float(count*np.sum(np.square(x - 2.)))

	params = np.zeros(2)
	objective = funcopt.CMAES(batch_size = 1, seed = seed, tolerance = 1e-10).optimize(Shifted(), params)

	assert np.allclose(params, 2., atol = 1e-2)
	assert objective == pytest.approx(0., abs = 1e-3)

	with pytest.raises(TypeError, match = 'shuffle'):
		funcopt.SGD().optimize(Shifted(), np.zeros(2))
