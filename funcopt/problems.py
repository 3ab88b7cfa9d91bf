# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np
import scipy.sparse as sp

import jax.numpy as jnp

from .function import Function, SeparableFunction, SparseFunction, batch_indices
from .autodiff import JaxSeparableFunction

__all__ = [
	'ParabolaSumFunction',
	'SphereFunction',
	'RosenbrockFunction',
	'GeneralizedRosenbrockFunction',
	'LogisticRegressionFunction'
]

################################################################################

class ParabolaSumFunction(SeparableFunction):
	"""
	Four parabolas f_i(x) = a_i |x|^2 + v_i sharing the vertex x = 0, so the
	minimum of the sum is the sum of the vertex values, 147.
	"""

	curvatures = np.array([4., 2., 3., 8.])
	vertices = np.array([20., 12., 15., 100.])

	def __init__(self, seed = None):
		self.order = np.arange(4)
		self.random_state = np.random.RandomState(seed)

	def num_functions(self):
		return 4

	def shuffle(self):
		self.order = self.random_state.permutation(4)

	def evaluate(self, x, begin = 0, batch_size = None):
		indices = batch_indices(self.order, begin, batch_size)
		return float(np.sum(self.curvatures[indices])*np.sum(np.square(x)) + np.sum(self.vertices[indices]))

	def gradient(self, x, begin = 0, batch_size = None):
		indices = batch_indices(self.order, begin, batch_size)
		return 2.*np.sum(self.curvatures[indices])*np.asarray(x, dtype = float)

	def minimum(self):
		return float(np.sum(self.vertices))


################################################################################

class SphereFunction(SparseFunction):
	"""
	f(x) = sum_i |x - c_i|^2 over n random centres of dimension d; minimised
	by the mean centre.
	"""

	def __init__(self, n = 10, d = 5, seed = None):
		self.random_state = np.random.RandomState(seed)
		self.centres = self.random_state.randn(n, d)
		self.order = np.arange(n)

	def num_functions(self):
		return self.centres.shape[0]

	def num_features(self):
		return self.centres.shape[1]

	def shuffle(self):
		self.order = self.random_state.permutation(self.centres.shape[0])

	def evaluate(self, x, begin = 0, batch_size = None):
		centres = self.centres[batch_indices(self.order, begin, batch_size)]
		return float(np.sum(np.square(np.asarray(x).reshape(1, -1) - centres)))

	def gradient(self, x, begin = 0, batch_size = None):
		centres = self.centres[batch_indices(self.order, begin, batch_size)]
		x = np.asarray(x, dtype = float)
		return (2.*np.sum(x.reshape(1, -1) - centres, axis = 0)).reshape(x.shape)

	def partial_gradient(self, x, j):
		value = 2.*np.sum(np.asarray(x).reshape(-1)[j] - self.centres[:, j])
		return sp.csr_matrix(([value], ([0], [j])), shape = (1, self.num_features()))

	def minimiser(self):
		return np.mean(self.centres, axis = 0)


################################################################################

class RosenbrockFunction(Function):
	"""
	f(x, y) = 100 (y - x^2)^2 + (1 - x)^2, minimum 0 at (1, 1).
	"""

	def evaluate(self, x):
		x0, x1 = np.asarray(x).reshape(-1)
		return float(100.*(x1 - x0**2)**2 + (1. - x0)**2)

	def gradient(self, x):
		x0, x1 = np.asarray(x).reshape(-1)
		grads = np.array([
			-400.*x0*(x1 - x0**2) - 2.*(1. - x0),
			200.*(x1 - x0**2)
		])
		return grads.reshape(np.shape(x))


################################################################################

class GeneralizedRosenbrockFunction(SeparableFunction):
	"""
	Separable n dimensional Rosenbrock function with n - 1 components
	f_i(x) = 100 (x_{i+1} - x_i^2)^2 + (1 - x_i)^2, minimum 0 at the ones
	vector.
	"""

	def __init__(self, n = 4, seed = None):
		if n < 2:
			raise ValueError(f'the Rosenbrock function needs at least 2 dimensions, got {n}')
		self.n = n
		self.order = np.arange(n - 1)
		self.random_state = np.random.RandomState(seed)

	def num_functions(self):
		return self.n - 1

	def shuffle(self):
		self.order = self.random_state.permutation(self.n - 1)

	def evaluate(self, x, begin = 0, batch_size = None):
		i = batch_indices(self.order, begin, batch_size)
		x = np.asarray(x).reshape(-1)
		return float(np.sum(100.*(x[i + 1] - x[i]**2)**2 + (1. - x[i])**2))

	def gradient(self, x, begin = 0, batch_size = None):
		i = batch_indices(self.order, begin, batch_size)
		shape = np.shape(x)
		x = np.asarray(x, dtype = float).reshape(-1)
		grads = np.zeros_like(x)
		np.add.at(grads, i, -400.*x[i]*(x[i + 1] - x[i]**2) - 2.*(1. - x[i]))
		np.add.at(grads, i + 1, 200.*(x[i + 1] - x[i]**2))
		return grads.reshape(shape)


################################################################################

class LogisticRegressionFunction(JaxSeparableFunction):
	"""
	Logistic loss of weights w on examples X with labels y in {0, 1}, one
	component per example, plus (l2 / 2) |w|^2 spread evenly over the
	examples.
	"""

	def __init__(self, X, y, l2 = 0.0, seed = None):
		X = np.asarray(X, dtype = float)
		y = np.asarray(y, dtype = float)
		if X.ndim != 2 or y.shape != (X.shape[0], ):
			raise ValueError(f'expected X of shape (n, d) and y of shape (n,), got {X.shape} and {y.shape}')
		n_data = X.shape[0]

		def loss(w, batch):
			logits = batch['X']@w
			signs = 2.*batch['y'] - 1.
			penalty = 0.5*l2*jnp.sum(w**2)*batch['y'].shape[0]/n_data
			return jnp.sum(jnp.logaddexp(0., -signs*logits)) + penalty

		self.l2 = l2
		super(LogisticRegressionFunction,self).__init__(loss, {'X': X, 'y': y}, seed = seed)

	def classify(self, w, X):
		return (np.asarray(X)@np.asarray(w) > 0.).astype(int)

	def accuracy(self, w, X, y):
		return float(np.mean(self.classify(w, X) == np.asarray(y)))
