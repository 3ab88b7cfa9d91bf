import numpy as np

import pytest

import funcopt

@pytest.mark.parametrize('descent_policy', ['random', 'cyclic', 'greedy'])
def test_scd_sphere(descent_policy, seed):
	function = funcopt.SphereFunction(n = 10, d = 5, seed = seed)
	params = np.zeros(5)

	optimizer = funcopt.SCD(step_size = 0.01, descent_policy = descent_policy, updates_per_epoch = 100,\
								tolerance = 1e-12, seed = seed)
	objective = optimizer.optimize(function, params)

	assert np.allclose(params, function.minimiser(), atol = 1e-4)
	assert objective == pytest.approx(function.evaluate(function.minimiser()), abs = 1e-6)

def test_scd_cyclic_epoch(seed):
	function = funcopt.SphereFunction(n = 10, d = 3, seed = seed)
	params = np.zeros(3)

	# step 1 / (2 n) solves each coordinate exactly
	optimizer = funcopt.SCD(step_size = 0.05, descent_policy = 'cyclic', max_iterations = 3)
	optimizer.optimize(function, params)

	assert np.allclose(params, function.minimiser())
	assert len(optimizer.logger['cost']) == 1

def test_scd_checks(seed):
	with pytest.raises(ValueError):
		funcopt.SCD(descent_policy = 'sorted')

	with pytest.raises(TypeError, match = 'partial_gradient'):
		funcopt.SCD().optimize(funcopt.ParabolaSumFunction(), np.zeros(1))

	with pytest.raises(ValueError):
		funcopt.SCD().optimize(funcopt.SphereFunction(d = 5, seed = seed), np.zeros(4))
