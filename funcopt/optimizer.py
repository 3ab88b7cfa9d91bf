# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import warnings

import numpy as np
import scipy.sparse as sp

from .function import check_function, with_gradient

################################################################################

class Optimizer(object):
	"""
	optimize(function, params) minimises function, overwrites params with
	the final iterate and returns the final objective value.
	"""

	def __init__(self, step_size = 1e-3, lr_schedule = None, weight_decay = None,\
					callbacks = None):
		self.step_size = step_size
		self.lr_schedule = lr_schedule
		if weight_decay is not None:
			assert type(weight_decay) is float
		self.weight_decay = weight_decay
		self.callbacks = [] if callbacks is None else list(callbacks)
		self.logger = {'cost': []}
		self.iteration = 1

	def optimize(self, function, params):
		raise NotImplementedError("Child class should implement method optimize")

	def current_step_size(self):
		if self.lr_schedule is not None:
			return float(self.lr_schedule(self.iteration))
		else:
			return self.step_size

	def begin_optimization(self, function, params):
		self.logger = {'cost': []}
		for callback in self.callbacks:
			callback.begin_optimization(self, function, params)

	def end_epoch(self, function, params, epoch, objective):
		"""Records the objective; True when a callback asks to stop."""
		self.logger['cost'].append(float(objective))
		stop = False
		for callback in self.callbacks:
			if callback.end_epoch(self, function, params, epoch, objective):
				stop = True
		return stop

	def end_optimization(self, function, params):
		for callback in self.callbacks:
			callback.end_optimization(self, function, params)


################################################################################

def check_params(params):
	if not isinstance(params, np.ndarray):
		raise TypeError(f'parameters must be a numpy array, got {type(params).__name__}')
	if not np.issubdtype(params.dtype, np.floating):
		raise TypeError(f'parameters must have a floating dtype, got {params.dtype}')
	if not params.flags.writeable:
		raise TypeError('parameters are updated in place and must be writeable')

def dense_gradient(gradient, shape):
	if sp.issparse(gradient):
		gradient = gradient.toarray()
	gradient = np.asarray(gradient, dtype = float)
	if gradient.shape != tuple(shape):
		# sparse matrices are always 2-D
		if gradient.size == int(np.prod(shape)) and gradient.ndim == 2 and 1 in gradient.shape:
			gradient = gradient.reshape(shape)
		else:
			raise ValueError(
				f'gradient of shape {gradient.shape} does not match parameters of shape {tuple(shape)}'
			)
	return gradient

def diverged(objective, optimizer):
	if not np.isfinite(objective):
		warnings.warn(
			f'{type(optimizer).__name__}: objective diverged to {objective}, terminating',
			RuntimeWarning
		)
		return True
	return False

def effective_batch_size(batch_size, num_functions):
	if num_functions < 1:
		raise ValueError(f'separable function must have at least one component, got {num_functions}')
	if batch_size < 1:
		raise ValueError(f'batch size must be positive, got {batch_size}')
	if batch_size > num_functions:
		warnings.warn(
			f'batch size {batch_size} exceeds the number of functions {num_functions}, '
			f'using {num_functions} instead'
		)
		return num_functions
	return batch_size

def full_objective(function, params, batch_size):
	num_functions = function.num_functions()
	objective = 0.0
	for begin in range(0, num_functions, batch_size):
		objective += float(function.evaluate(params, begin, min(batch_size, num_functions - begin)))
	return objective


################################################################################

class StochasticOptimizer(Optimizer):
	"""
	Mini-batch driver shared by the first order methods on separable
	functions. Child classes set up their state in initialize and implement
	update, returning the new raveled parameters.

	max_iterations counts visited component functions, 0 means no limit.
	"""

	def __init__(self, step_size = 1e-2, batch_size = 32, max_iterations = 100000,\
					tolerance = 1e-5, shuffle = True, exact_objective = False,\
					reset_policy = True, lr_schedule = None, weight_decay = None,\
					callbacks = None):
		self.batch_size = batch_size
		self.max_iterations = max_iterations
		self.tolerance = tolerance
		self.shuffle = shuffle
		self.exact_objective = exact_objective
		self.reset_policy = reset_policy
		self.state_shape = None

		super(StochasticOptimizer,self).__init__(step_size = step_size, lr_schedule = lr_schedule,\
					weight_decay = weight_decay, callbacks = callbacks)

	def initialize(self, rav_param):
		pass

	def update(self, rav_param, grads, step_size):
		raise NotImplementedError("Child class should implement method update")

	def step(self, params, grads):
		step_size = self.current_step_size()
		rav_param = params.reshape(-1)
		rav_grads = dense_gradient(grads, params.shape).reshape(-1)
		rav_param = self.update(rav_param, rav_grads, step_size)
		params[...] = np.asarray(rav_param).reshape(params.shape)
		self.iteration += 1

	def optimize(self, function, params):
		check_function(function, 'separable_differentiable', self)
		check_params(params)
		function = with_gradient(function)

		num_functions = function.num_functions()
		batch_size = effective_batch_size(self.batch_size, num_functions)

		if self.reset_policy or self.state_shape != params.shape:
			self.iteration = 1
			self.initialize(params.reshape(-1))
			self.state_shape = params.shape

		self.begin_optimization(function, params)
		if self.shuffle:
			function.shuffle()

		overall_objective = 0.0
		last_objective = np.inf
		begin = 0
		epoch = 0
		visited = 0
		while self.max_iterations == 0 or visited < self.max_iterations:
			current_batch = min(batch_size, num_functions - begin)
			objective, grads = function.evaluate_with_gradient(params, begin, current_batch)
			overall_objective += float(objective)
			self.step(params, grads)

			begin += current_batch
			visited += current_batch
			if begin < num_functions:
				continue

			epoch += 1
			if diverged(overall_objective, self):
				self.end_optimization(function, params)
				return overall_objective

			if self.end_epoch(function, params, epoch, overall_objective):
				break
			if abs(last_objective - overall_objective) < self.tolerance:
				break

			last_objective = overall_objective
			overall_objective = 0.0
			begin = 0
			if self.shuffle:
				function.shuffle()

		# ran out of iterations right at an epoch boundary
		if begin == 0 and epoch > 0:
			overall_objective = last_objective

		self.end_optimization(function, params)

		if self.exact_objective:
			overall_objective = full_objective(function, params, batch_size)
		return float(overall_objective)
