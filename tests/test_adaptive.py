import numpy as np

import pytest

import funcopt

@pytest.mark.parametrize('method, arguments', [
	(funcopt.AdaGrad, {'step_size': 0.5}),
	(funcopt.RMSProp, {'step_size': 0.01}),
	(funcopt.Adam, {'step_size': 0.05}),
	(funcopt.AdaMax, {'step_size': 0.05}),
	(funcopt.AMSGrad, {'step_size': 0.05}),
	(funcopt.Nadam, {'step_size': 0.05}),
])
def test_adaptive_parabolas(method, arguments, seed):
	function = funcopt.ParabolaSumFunction(seed = seed)
	params = np.array([5.])

	optimizer = method(batch_size = 4, max_iterations = 4*2000, exact_objective = True, **arguments)
	objective = optimizer.optimize(function, params)

	assert abs(params[0]) < 0.1
	assert objective == pytest.approx(147., abs = 0.2)

def test_adam_logistic_regression(seed):
	rng = np.random.RandomState(seed)
	w_true = rng.randn(3)
	X = rng.randn(200, 3)
	y = (X@w_true > 0).astype(float)
	function = funcopt.LogisticRegressionFunction(X, y, l2 = 1.0, seed = seed)

	params = np.zeros(3)
	objective = funcopt.Adam(step_size = 0.05, batch_size = 20, max_iterations = 200*100,\
								exact_objective = True).optimize(function, params)

	assert objective < 200*np.log(2.)
	assert function.accuracy(params, X, y) > 0.9
	assert np.dot(params, w_true) > 0.

def test_adam_state(seed):
	function = funcopt.ParabolaSumFunction(seed = seed)

	optimizer = funcopt.Adam(step_size = 0.05, batch_size = 4, max_iterations = 40, reset_policy = False)
	optimizer.optimize(function, np.array([5.]))
	m = np.array(optimizer.m)
	assert m.shape == (1, )
	assert np.all(m != 0.)

	# shape change reinitializes the moments
	optimizer.optimize(function, np.ones((2, 2)))
	assert np.array(optimizer.m).shape == (4, )
