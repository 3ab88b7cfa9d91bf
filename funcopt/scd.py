# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np
import scipy.sparse as sp

from .function import check_function
from .optimizer import Optimizer, check_params, diverged

################################################################################
# Shalev-Shwartz & Tewari, Stochastic Methods for l1-regularized Loss
# Minimization, JMLR 2011

class SCD(Optimizer):

	def __init__(self, step_size = 1e-2, max_iterations = 100000, tolerance = 1e-5,\
					updates_per_epoch = 0, descent_policy = 'random', seed = None,\
					lr_schedule = None, weight_decay = None, callbacks = None):
		"""
		descent_policy picks the feature updated at each iteration:
			'random': uniformly at random,
			'cyclic': 0, 1, ..., num_features - 1, 0, ...
			'greedy': largest absolute partial derivative.
		updates_per_epoch = 0 means num_features updates per epoch.
		"""
		if descent_policy not in ('random', 'cyclic', 'greedy'):
			raise ValueError(
				f'descent_policy must be one of random, cyclic, greedy, got {descent_policy}'
			)
		self.max_iterations = max_iterations
		self.tolerance = tolerance
		self.updates_per_epoch = updates_per_epoch
		self.descent_policy = descent_policy
		self.seed = seed

		super(SCD,self).__init__(step_size = step_size, lr_schedule = lr_schedule,\
					weight_decay = weight_decay, callbacks = callbacks)

	def optimize(self, function, params):
		check_function(function, 'sparse', self)
		check_params(params)

		num_features = function.num_features()
		if params.ndim not in (1, 2) or params.shape[-1] != num_features:
			raise ValueError(
				f'parameters of shape {params.shape} do not have {num_features} features along the last axis'
			)

		updates_per_epoch = self.updates_per_epoch if self.updates_per_epoch > 0 else num_features
		random_state = np.random.RandomState(self.seed)

		self.iteration = 1
		self.begin_optimization(function, params)

		last_objective = float(function.evaluate(params))
		objective = last_objective
		feature = 0
		i = 0
		while self.max_iterations == 0 or i < self.max_iterations:
			if self.descent_policy == 'random':
				feature = random_state.randint(num_features)
			elif self.descent_policy == 'greedy':
				feature = greedy_feature(function, params, num_features)

			column = partial_column(function.partial_gradient(params, feature), params, feature)
			if self.weight_decay is not None:
				column = column + self.weight_decay*params[..., feature]
			params[..., feature] -= self.current_step_size()*column
			self.iteration += 1
			i += 1

			if self.descent_policy == 'cyclic':
				feature = (feature + 1) % num_features

			if i % updates_per_epoch != 0:
				continue

			objective = float(function.evaluate(params))
			if diverged(objective, self):
				break
			if self.end_epoch(function, params, i//updates_per_epoch, objective):
				break
			if abs(last_objective - objective) < self.tolerance:
				break
			last_objective = objective

		self.end_optimization(function, params)
		return float(function.evaluate(params))


def partial_column(partial_gradient, params, feature):
	if sp.issparse(partial_gradient):
		column = partial_gradient.tocsc()[:, feature].toarray()
	else:
		column = np.asarray(partial_gradient).reshape(-1, params.shape[-1])[:, feature]
	return np.asarray(column, dtype = float).reshape(params[..., feature].shape)

def greedy_feature(function, params, num_features):
	magnitudes = [
		np.max(np.abs(partial_column(function.partial_gradient(params, j), params, j)))
		for j in range(num_features)
	]
	return int(np.argmax(magnitudes))
