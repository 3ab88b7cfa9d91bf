# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import warnings
from collections import deque

import numpy as np

from .function import check_function, with_gradient
from .optimizer import Optimizer, check_params, dense_gradient, diverged

################################################################################
# Nocedal & Wright, Numerical Optimization, algorithms 7.4 and 7.5

class LBFGS(Optimizer):

	def __init__(self, num_basis = 10, max_iterations = 10000, armijo_constant = 1e-4,\
					backtrack = 0.5, min_step = 1e-20, max_line_search_trials = 50,\
					min_gradient_norm = 1e-6, factr = 1e7, callbacks = None):
		"""
		num_basis is the number of stored (s, y) curvature pairs. The
		relative decrease test stops once
			(f_k - f_{k+1}) / max(|f_k|, |f_{k+1}|, 1) <= factr * machine epsilon
		as in L-BFGS-B.
		"""
		if num_basis < 1:
			raise ValueError(f'num_basis must be positive, got {num_basis}')
		if not 0. < backtrack < 1.:
			raise ValueError(f'backtrack must lie in (0, 1), got {backtrack}')
		self.num_basis = num_basis
		self.max_iterations = max_iterations
		self.armijo_constant = armijo_constant
		self.backtrack = backtrack
		self.min_step = min_step
		self.max_line_search_trials = max_line_search_trials
		self.min_gradient_norm = min_gradient_norm
		self.factr = factr

		super(LBFGS,self).__init__(step_size = 1.0, callbacks = callbacks)

	def optimize(self, function, params):
		check_function(function, 'differentiable', self)
		check_params(params)
		function = with_gradient(function)

		shape = params.shape
		s_history = deque(maxlen = self.num_basis)
		y_history = deque(maxlen = self.num_basis)

		self.begin_optimization(function, params)
		objective, grads = function.evaluate_with_gradient(params)
		objective = float(objective)
		grads = dense_gradient(grads, shape).reshape(-1)

		k = 0
		recorded = False
		while self.max_iterations == 0 or k < self.max_iterations:
			recorded = True
			if diverged(objective, self):
				break
			if self.end_epoch(function, params, k, objective):
				break
			if np.linalg.norm(grads) < self.min_gradient_norm:
				break

			direction = -two_loop_recursion(grads, s_history, y_history)
			slope = np.dot(grads, direction)
			if slope >= 0:
				# not a descent direction, restart from steepest descent
				s_history.clear()
				y_history.clear()
				direction = -grads
				slope = -np.dot(grads, grads)

			if len(s_history) == 0:
				step = min(1.0, 1.0/np.linalg.norm(grads))
			else:
				step = 1.0

			rav_param = params.reshape(-1).astype(float)
			found = False
			for trial in range(self.max_line_search_trials):
				params[...] = (rav_param + step*direction).reshape(shape)
				new_objective, new_grads = function.evaluate_with_gradient(params)
				new_objective = float(new_objective)
				if np.isfinite(new_objective) and \
						new_objective <= objective + self.armijo_constant*step*slope:
					found = True
					break
				step *= self.backtrack
				if step < self.min_step:
					break

			if not found:
				params[...] = rav_param.reshape(shape)
				warnings.warn('LBFGS: line search failed to find a sufficient decrease, terminating')
				break

			new_grads = dense_gradient(new_grads, shape).reshape(-1)
			s = step*direction
			y = new_grads - grads
			if np.dot(s, y) > np.finfo(float).eps*np.dot(y, y):
				s_history.append(s)
				y_history.append(y)

			decrease = (objective - new_objective)/max(abs(objective), abs(new_objective), 1.0)
			objective, grads = new_objective, new_grads
			self.iteration += 1
			k += 1
			recorded = False
			if decrease <= self.factr*np.finfo(float).eps:
				break

		# the accepted iterate of the last step has not been reported yet
		if not recorded:
			self.end_epoch(function, params, k, objective)
		self.end_optimization(function, params)
		return objective


def two_loop_recursion(grads, s_history, y_history):
	"""
	Applies the inverse Hessian approximation built from the stored pairs
	to grads.
	"""
	q = np.array(grads, dtype = float)
	if len(s_history) == 0:
		return q

	alphas = []
	for s, y in zip(reversed(s_history), reversed(y_history)):
		rho = 1.0/np.dot(y, s)
		alpha = rho*np.dot(s, q)
		q -= alpha*y
		alphas.append((rho, alpha))

	gamma = np.dot(s_history[-1], y_history[-1])/np.dot(y_history[-1], y_history[-1])
	r = gamma*q
	for (s, y), (rho, alpha) in zip(zip(s_history, y_history), reversed(alphas)):
		beta = rho*np.dot(y, r)
		r += s*(alpha - beta)
	return r
