# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np

import jax.numpy as jnp
from jax import jit

from .function import check_function, with_gradient
from .optimizer import Optimizer, StochasticOptimizer, check_params, dense_gradient, diverged


################################################################################

class GradientDescent(Optimizer):
	"""
	Full batch gradient descent on a differentiable function.
	max_iterations = 0 means no limit.
	"""

	def __init__(self, step_size = 1e-2, max_iterations = 100000, tolerance = 1e-5,\
					lr_schedule = None, weight_decay = None, callbacks = None):
		self.max_iterations = max_iterations
		self.tolerance = tolerance

		super(GradientDescent,self).__init__(step_size = step_size, lr_schedule = lr_schedule,\
					weight_decay = weight_decay, callbacks = callbacks)

	def optimize(self, function, params):
		check_function(function, 'differentiable', self)
		check_params(params)
		function = with_gradient(function)

		self.iteration = 1
		self.begin_optimization(function, params)

		last_objective = np.inf
		objective, grads = function.evaluate_with_gradient(params)
		objective = float(objective)
		k = 0
		recorded = False
		while self.max_iterations == 0 or k < self.max_iterations:
			recorded = True
			if diverged(objective, self):
				break
			if self.end_epoch(function, params, k, objective):
				break
			if abs(last_objective - objective) < self.tolerance:
				break
			last_objective = objective

			step_size = self.current_step_size()
			rav_grads = dense_gradient(grads, params.shape).reshape(-1)
			rav_param = sgd_update(params.reshape(-1), rav_grads, step_size = step_size,\
									weight_decay = self.weight_decay)
			params[...] = np.asarray(rav_param).reshape(params.shape)
			self.iteration += 1
			k += 1

			objective, grads = function.evaluate_with_gradient(params)
			objective = float(objective)
			recorded = False

		# out of iterations, the last iterate has not been reported yet
		if not recorded and not diverged(objective, self):
			self.end_epoch(function, params, k, objective)
		self.end_optimization(function, params)
		return objective


################################################################################

class SGD(StochasticOptimizer):
	"""
	Mini-batch stochastic gradient descent: x -= step_size * g for the
	gradient g of each batch of component functions.
	"""

	def update(self, rav_param, grads, step_size):
		return sgd_update(rav_param, grads, step_size = step_size, weight_decay = self.weight_decay)


@jit
def sgd_update(rav_param, grads, step_size = 1e-3, weight_decay = None):
	p = grads
	if weight_decay is not None:
		p += weight_decay*rav_param
	rav_param -= step_size*p
	return rav_param


################################################################################

class MomentumSGD(StochasticOptimizer):

	def __init__(self, step_size = 1e-2, beta = 0.9, **kwargs):
		self.beta = beta
		self.momentum = None
		super(MomentumSGD,self).__init__(step_size = step_size, **kwargs)

	def initialize(self, rav_param):
		self.momentum = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.momentum = momentum_sgd_update(rav_param, grads, self.momentum,\
											beta = self.beta, step_size = step_size,\
											weight_decay = self.weight_decay)
		return rav_param


@jit
def momentum_sgd_update(rav_param, grads, momentum, beta = 0.9, step_size = 1e-3,\
							weight_decay = None):
	momentum = beta*momentum + grads
	p = momentum
	if weight_decay is not None:
		p += weight_decay*rav_param
	rav_param -= step_size*p
	return rav_param, momentum


################################################################################

class NesterovMomentumSGD(MomentumSGD):

	def update(self, rav_param, grads, step_size):
		rav_param, self.momentum = nesterov_sgd_update(rav_param, grads, self.momentum,\
											beta = self.beta, step_size = step_size,\
											weight_decay = self.weight_decay)
		return rav_param


@jit
def nesterov_sgd_update(rav_param, grads, momentum, beta = 0.9, step_size = 1e-3,\
							weight_decay = None):
	momentum = beta*momentum + grads
	p = grads + beta*momentum
	if weight_decay is not None:
		p += weight_decay*rav_param
	rav_param -= step_size*p
	return rav_param, momentum
