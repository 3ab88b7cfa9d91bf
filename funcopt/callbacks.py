# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np

from tqdm import tqdm

__all__ = [
	'Callback',
	'PrintLoss',
	'EarlyStopAtMinLoss',
	'ProgressBar',
	'StoreBestCoordinates'
]

################################################################################

class Callback(object):
	"""
	Hooks called by the optimizers. Returning True from end_epoch stops the
	optimization.
	"""

	def begin_optimization(self, optimizer, function, params):
		pass

	def end_epoch(self, optimizer, function, params, epoch, objective):
		return False

	def end_optimization(self, optimizer, function, params):
		pass


class PrintLoss(Callback):
	def __init__(self, print_freq = 1):
		assert print_freq > 0
		self.print_freq = print_freq

	def end_epoch(self, optimizer, function, params, epoch, objective):
		if epoch % self.print_freq == 0:
			print('Iteration ',epoch,'cost = ',objective)
		return False


class EarlyStopAtMinLoss(Callback):
	"""
	Stops once the objective has not improved for patience epochs.
	"""

	def __init__(self, patience = 10):
		self.patience = patience

	def begin_optimization(self, optimizer, function, params):
		self.best_objective = np.inf
		self.steps = 0

	def end_epoch(self, optimizer, function, params, epoch, objective):
		if objective < self.best_objective:
			self.best_objective = objective
			self.steps = 0
		else:
			self.steps += 1
		return self.steps >= self.patience


class ProgressBar(Callback):
	def __init__(self, desc = 'epochs', disable = False):
		self.desc = desc
		self.disable = disable
		self.pbar = None

	def begin_optimization(self, optimizer, function, params):
		self.pbar = tqdm(total = None, desc = self.desc, disable = self.disable, leave = True)

	def end_epoch(self, optimizer, function, params, epoch, objective):
		self.pbar.set_postfix(cost = objective)
		self.pbar.update()
		return False

	def end_optimization(self, optimizer, function, params):
		self.pbar.close()


class StoreBestCoordinates(Callback):
	def begin_optimization(self, optimizer, function, params):
		self.best_objective = np.inf
		self.best_coordinates = None

	def end_epoch(self, optimizer, function, params, epoch, objective):
		if objective < self.best_objective:
			self.best_objective = objective
			self.best_coordinates = np.array(params)
		return False
