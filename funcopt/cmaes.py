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

from .function import check_function
from .optimizer import Optimizer, check_params, diverged, effective_batch_size, full_objective

################################################################################
# Hansen, The CMA Evolution Strategy: A Tutorial, https://arxiv.org/abs/1604.00772

class CMAES(Optimizer):

	def __init__(self, population_size = 0, lower_bound = -10., upper_bound = 10.,\
					sigma = None, batch_size = 32, max_iterations = 1000, tolerance = 1e-5,\
					seed = None, callbacks = None):
		"""
		Derivative free, only evaluate is used. Candidates are clipped to
		[lower_bound, upper_bound] and the initial step size defaults to 0.3
		of the box width. population_size = 0 means 4 + floor(3 ln n).
		"""
		if not lower_bound < upper_bound:
			raise ValueError(f'lower_bound {lower_bound} must be below upper_bound {upper_bound}')
		self.population_size = population_size
		self.lower_bound = lower_bound
		self.upper_bound = upper_bound
		if sigma is None:
			sigma = 0.3*(upper_bound - lower_bound)
		self.sigma = sigma
		self.batch_size = batch_size
		self.max_iterations = max_iterations
		self.tolerance = tolerance
		self.seed = seed

		super(CMAES,self).__init__(step_size = sigma, callbacks = callbacks)

	def optimize(self, function, params):
		check_function(function, 'batched', self)
		check_params(params)

		shape = params.shape
		n = params.size
		batch_size = effective_batch_size(self.batch_size, function.num_functions())
		random_state = np.random.RandomState(self.seed)
		objective_f = lambda x: full_objective(function, x.reshape(shape), batch_size)

		# Strategy parameters
		lam = self.population_size if self.population_size > 0 else 4 + int(3*math.log(n))
		if lam < 2:
			raise ValueError(f'population size must be at least 2, got {lam}')
		mu = lam//2
		weights = np.log(mu + 0.5) - np.log(np.arange(1, mu + 1))
		weights /= np.sum(weights)
		mueff = 1./np.sum(weights**2)

		cc = (4 + mueff/n)/(n + 4 + 2*mueff/n)
		cs = (mueff + 2)/(n + mueff + 5)
		c1 = 2/((n + 1.3)**2 + mueff)
		cmu = min(1 - c1, 2*(mueff - 2 + 1/mueff)/((n + 2)**2 + mueff))
		damps = 1 + 2*max(0., math.sqrt((mueff - 1)/(n + 1)) - 1) + cs
		chiN = math.sqrt(n)*(1 - 1/(4*n) + 1/(21*n**2))

		# Dynamic state
		mean = np.clip(params.reshape(-1).astype(float), self.lower_bound, self.upper_bound)
		sigma = self.sigma
		pc = np.zeros(n)
		ps = np.zeros(n)
		B = np.eye(n)
		D = np.ones(n)
		C = np.eye(n)

		best_x = np.array(mean)
		best_objective = objective_f(mean)
		last_objective = best_objective

		self.begin_optimization(function, params)

		if self.max_iterations == 0:
			generations = itertools.count()
		else:
			generations = range(self.max_iterations)

		for generation in generations:
			z = random_state.randn(lam, n)
			y = z@(B*D).T
			x = np.clip(mean + sigma*y, self.lower_bound, self.upper_bound)
			fitness = np.array([objective_f(xk) for xk in x])

			order = np.argsort(fitness)
			if fitness[order[0]] < best_objective:
				best_objective = float(fitness[order[0]])
				best_x = np.array(x[order[0]])

			old_mean = mean
			selected = x[order[:mu]]
			mean = weights@selected
			y_w = (mean - old_mean)/sigma

			invsqrtC = (B/D)@B.T
			ps = (1 - cs)*ps + math.sqrt(cs*(2 - cs)*mueff)*(invsqrtC@y_w)
			hsig = float(np.linalg.norm(ps)/math.sqrt(1 - (1 - cs)**(2*(generation + 1)))/chiN \
						< 1.4 + 2/(n + 1))
			pc = (1 - cc)*pc + hsig*math.sqrt(cc*(2 - cc)*mueff)*y_w

			artmp = (selected - old_mean)/sigma
			C = (1 - c1 - cmu)*C \
				+ c1*(np.outer(pc, pc) + (1 - hsig)*cc*(2 - cc)*C) \
				+ cmu*(artmp.T*weights)@artmp
			sigma *= math.exp((cs/damps)*(np.linalg.norm(ps)/chiN - 1))

			C = np.triu(C) + np.triu(C, 1).T
			eigenvalues, B = np.linalg.eigh(C)
			D = np.sqrt(np.maximum(eigenvalues, 1e-20))

			objective = objective_f(mean)
			if objective < best_objective:
				best_objective = objective
				best_x = np.array(mean)

			params[...] = mean.reshape(shape)
			if diverged(objective, self):
				break
			if self.end_epoch(function, params, generation, objective):
				break
			if abs(last_objective - objective) < self.tolerance:
				break
			if sigma*np.max(D) < 1e-12:
				break
			last_objective = objective

		params[...] = best_x.reshape(shape)
		self.end_optimization(function, params)
		return float(best_objective)
