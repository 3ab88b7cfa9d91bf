# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import numpy as np

import jax
import jax.numpy as jnp
from jax import grad, jit, value_and_grad

from .function import Function, SeparableFunction, batch_indices

__all__ = [
	'JaxFunction',
	'JaxSeparableFunction'
]

################################################################################

class JaxFunction(Function):
	"""
	Wraps loss(x), a jax.numpy expression, gradients come from jax.grad.
	"""

	def __init__(self, loss):
		self.loss = loss
		self._loss = jit(loss)
		self._grad = jit(grad(loss))
		self._value_and_grad = jit(value_and_grad(loss))

	def evaluate(self, x):
		return float(self._loss(jnp.asarray(x)))

	def gradient(self, x):
		return np.asarray(self._grad(jnp.asarray(x)))

	def evaluate_with_gradient(self, x):
		value, grads = self._value_and_grad(jnp.asarray(x))
		return float(value), np.asarray(grads)


################################################################################

class JaxSeparableFunction(SeparableFunction):
	"""
	loss(x, batch) must return the sum of the per example losses in batch,
	a pytree whose leaves are indexed along their leading axis. Each example
	of data is one component function.
	"""

	def __init__(self, loss, data, seed = None):
		leaves = jax.tree_util.tree_leaves(data)
		if len(leaves) == 0:
			raise ValueError('data must contain at least one array')
		n_data = leaves[0].shape[0]
		for leaf in leaves:
			if leaf.shape[0] != n_data:
				raise ValueError(
					f'all data arrays must share the leading dimension, got {leaf.shape[0]} and {n_data}'
				)

		self.loss = loss
		self.data = data
		self.n_data = n_data
		self.order = np.arange(n_data)
		self.random_state = np.random.RandomState(seed)

		self._loss = jit(loss)
		self._grad = jit(grad(loss))
		self._value_and_grad = jit(value_and_grad(loss))

	def num_functions(self):
		return self.n_data

	def shuffle(self):
		self.order = self.random_state.permutation(self.n_data)

	def batch(self, begin = 0, batch_size = None):
		indices = batch_indices(self.order, begin, batch_size)
		return jax.tree_util.tree_map(lambda leaf: leaf[indices], self.data)

	def evaluate(self, x, begin = 0, batch_size = None):
		return float(self._loss(jnp.asarray(x), self.batch(begin, batch_size)))

	def gradient(self, x, begin = 0, batch_size = None):
		return np.asarray(self._grad(jnp.asarray(x), self.batch(begin, batch_size)))

	def evaluate_with_gradient(self, x, begin = 0, batch_size = None):
		value, grads = self._value_and_grad(jnp.asarray(x), self.batch(begin, batch_size))
		return float(value), np.asarray(grads)
