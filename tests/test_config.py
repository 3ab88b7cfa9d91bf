import numpy as np

import pytest

import funcopt
from funcopt import config

def test_split():
	assert config.split({'adam': {'step_size': 0.1}}) == ('adam', {'step_size': 0.1})
	assert config.split({'lbfgs': None}) == ('lbfgs', {})

	with pytest.raises(ValueError):
		config.split({'adam': {}, 'sgd': {}})

	with pytest.raises(ValueError):
		config.extract({'newton': {}}, library = config.__methods__)

def test_from_config():
	optimizer = config.from_config({'adam': {'step_size': 0.1, 'beta_1': 0.8}})
	assert isinstance(optimizer, funcopt.Adam)
	assert optimizer.step_size == 0.1
	assert optimizer.beta_1 == 0.8

	optimizer = config.from_config({
		'sgd': {
			'step_size': 0.01,
			'callbacks': [{'print_loss': {'print_freq': 10}}, {'early_stop': None}],
		}
	})
	assert isinstance(optimizer, funcopt.SGD)
	assert isinstance(optimizer.callbacks[0], funcopt.PrintLoss)
	assert optimizer.callbacks[0].print_freq == 10
	assert isinstance(optimizer.callbacks[1], funcopt.EarlyStopAtMinLoss)

def test_schedule_from_config():
	optimizer = config.from_config({
		'sgd': {
			'lr_schedule': {'exponential_decay': {'init_value': 0.01, 'transition_steps': 1, 'decay_rate': 0.5}},
		}
	})
	optimizer.iteration = 2
	assert optimizer.current_step_size() == pytest.approx(0.0025)

	with pytest.raises(ValueError):
		config.schedule({'not_a_schedule': {}})

def test_every_method_optimizes(seed):
	function = funcopt.SphereFunction(n = 4, d = 3, seed = seed)
	for name in config.__methods__:
		arguments = {}
		if name in ['sgd', 'mgd', 'nesterov', 'adagrad', 'rmsprop', 'adam', 'adamax', 'amsgrad', 'nadam', 'svrg']:
			arguments = {'batch_size': 2, 'max_iterations': 8}
			if name != 'svrg':
				arguments['exact_objective'] = True
		elif name == 'cmaes':
			arguments = {'batch_size': 4, 'max_iterations': 2, 'seed': seed}
		elif name in ['gd', 'lbfgs', 'scd']:
			arguments = {'max_iterations': 2}

		params = np.zeros(3)
		objective = config.from_config({name: arguments}).optimize(function, params)
		assert np.isfinite(objective), name
		assert objective <= function.evaluate(np.zeros(3)) + 1e-8, name
