# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import math
import itertools

import numpy as np

from jax import jit

from .function import check_function, with_gradient
from .optimizer import Optimizer, check_params, dense_gradient, diverged,\
						effective_batch_size, full_objective

################################################################################
# Johnson & Zhang, Accelerating Stochastic Gradient Descent using Predictive
# Variance Reduction, NIPS 2013

class SVRG(Optimizer):
	"""
	Each outer iteration takes a snapshot, computes its full gradient mu and
	runs inner_iterations variance reduced steps
		x -= step_size * (g_B(x) - g_B(snapshot) + mu * |B| / n).
	inner_iterations = 0 means one epoch worth of batches, max_iterations
	counts outer iterations and 0 means no limit.
	"""

	def __init__(self, step_size = 1e-2, batch_size = 32, max_iterations = 1000,\
					inner_iterations = 0, tolerance = 1e-5, shuffle = True,\
					lr_schedule = None, weight_decay = None, callbacks = None):
		self.batch_size = batch_size
		self.max_iterations = max_iterations
		self.inner_iterations = inner_iterations
		self.tolerance = tolerance
		self.shuffle = shuffle

		super(SVRG,self).__init__(step_size = step_size, lr_schedule = lr_schedule,\
					weight_decay = weight_decay, callbacks = callbacks)

	def optimize(self, function, params):
		check_function(function, 'separable_differentiable', self)
		check_params(params)
		function = with_gradient(function)

		shape = params.shape
		num_functions = function.num_functions()
		batch_size = effective_batch_size(self.batch_size, num_functions)
		if self.inner_iterations > 0:
			inner_iterations = self.inner_iterations
		else:
			inner_iterations = math.ceil(num_functions/batch_size)

		self.iteration = 1
		self.begin_optimization(function, params)

		if self.max_iterations == 0:
			outer = itertools.count()
		else:
			outer = range(self.max_iterations)

		last_objective = np.inf
		for k in outer:
			snapshot = np.array(params)
			objective, mu = function.evaluate_with_gradient(snapshot, 0, num_functions)
			objective = float(objective)
			mu = dense_gradient(mu, shape).reshape(-1)

			if diverged(objective, self):
				self.end_optimization(function, params)
				return objective
			if self.end_epoch(function, params, k, objective):
				break
			if abs(last_objective - objective) < self.tolerance:
				break
			last_objective = objective

			if self.shuffle:
				function.shuffle()
			begin = 0
			for _ in range(inner_iterations):
				current_batch = min(batch_size, num_functions - begin)
				grads = dense_gradient(function.gradient(params, begin, current_batch), shape)
				snapshot_grads = dense_gradient(function.gradient(snapshot, begin, current_batch), shape)

				rav_param = svrg_update(params.reshape(-1), grads.reshape(-1),\
								snapshot_grads.reshape(-1), mu, current_batch/num_functions,\
								step_size = self.current_step_size(), weight_decay = self.weight_decay)
				params[...] = np.asarray(rav_param).reshape(shape)
				self.iteration += 1

				begin += current_batch
				if begin >= num_functions:
					begin = 0
					if self.shuffle:
						function.shuffle()

		self.end_optimization(function, params)
		return full_objective(function, params, batch_size)


@jit
def svrg_update(rav_param, grads, snapshot_grads, mu, fraction, step_size = 1e-3,\
					weight_decay = None):
	p = grads - snapshot_grads + fraction*mu
	if weight_decay is not None:
		p += weight_decay*rav_param
	rav_param -= step_size*p
	return rav_param
