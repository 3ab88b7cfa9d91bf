# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np

__all__ = [
	'Function',
	'SeparableFunction',
	'SparseFunction',
	'check_function',
	'with_gradient'
]

################################################################################

class Function(object):
	"""
	Objective f(x) of a parameter array x. Lower is better.

	Optimizers only rely on the methods being present, subclassing is
	optional.
	"""

	def evaluate(self, x):
		raise NotImplementedError("Child class should implement method evaluate")

	def gradient(self, x):
		raise NotImplementedError("Child class should implement method gradient")

	def evaluate_with_gradient(self, x):
		return self.evaluate(x), self.gradient(x)


################################################################################

class SeparableFunction(Function):
	"""
	Objective of the form f(x) = sum_i f_i(x), i < num_functions().

	evaluate / gradient act on the component functions
	[begin, begin + batch_size) of the current ordering; batch_size = None
	means everything from begin to the end, so the defaults give the full
	objective.
	"""

	def num_functions(self):
		raise NotImplementedError("Child class should implement method num_functions")

	def shuffle(self):
		pass

	def evaluate(self, x, begin = 0, batch_size = None):
		raise NotImplementedError("Child class should implement method evaluate")

	def gradient(self, x, begin = 0, batch_size = None):
		raise NotImplementedError("Child class should implement method gradient")

	def evaluate_with_gradient(self, x, begin = 0, batch_size = None):
		return self.evaluate(x, begin, batch_size), self.gradient(x, begin, batch_size)


################################################################################

class SparseFunction(SeparableFunction):
	"""
	Separable objective that can also differentiate with respect to a single
	feature j, i.e. the j-th entry along the last axis of x.
	partial_gradient returns a scipy.sparse matrix shaped like x (as 2-D)
	whose only stored entries are in column j.
	"""

	def num_features(self):
		raise NotImplementedError("Child class should implement method num_features")

	def partial_gradient(self, x, j):
		raise NotImplementedError("Child class should implement method partial_gradient")


################################################################################
# Capability checks

__requirements__ = {
	'evaluate': ('evaluate', ),
	'differentiable': ('evaluate', 'gradient'),
	'batched': ('evaluate', 'num_functions'),
	'separable': ('evaluate', 'num_functions', 'shuffle'),
	'separable_differentiable': ('evaluate', 'gradient', 'num_functions', 'shuffle'),
	'sparse': ('evaluate', 'num_functions', 'num_features', 'partial_gradient'),
}

def check_function(function, kind, optimizer = None):
	if kind not in __requirements__:
		raise ValueError(
			f'unknown function kind {kind}, expected one of {", ".join(__requirements__)}'
		)

	missing = [
		name for name in __requirements__[kind]
		if not callable(getattr(function, name, None))
	]

	if len(missing) > 0:
		user = 'the optimizer' if optimizer is None else type(optimizer).__name__
		raise TypeError(
			f'{type(function).__name__} cannot be used with {user}: '
			f'a {kind} function must implement {", ".join(missing)}'
		)

class _WithGradient(object):
	def __init__(self, function):
		self.function = function

	def __getattr__(self, name):
		return getattr(self.function, name)

	def evaluate_with_gradient(self, x, *args):
		return self.function.evaluate(x, *args), self.function.gradient(x, *args)

def with_gradient(function):
	"""
	Returns a function exposing evaluate_with_gradient, composing evaluate and
	gradient when the function does not provide it.
	"""
	if callable(getattr(function, 'evaluate_with_gradient', None)):
		return function
	return _WithGradient(function)


def batch_indices(order, begin, batch_size):
	n = len(order)
	if batch_size is None:
		batch_size = n - begin
	if begin < 0 or batch_size < 0 or begin + batch_size > n:
		raise ValueError(
			f'batch [{begin}, {begin + batch_size}) is out of range for {n} functions'
		)
	return np.asarray(order)[begin:begin + batch_size]
