# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import jax.numpy as jnp
from jax import jit

from .optimizer import StochasticOptimizer

################################################################################
# Based on https://en.wikipedia.org/wiki/Stochastic_gradient_descent#AdaGrad

class AdaGrad(StochasticOptimizer):

	def __init__(self, step_size = 1e-2, epsilon = 1e-7, **kwargs):
		self.epsilon = epsilon
		self.G = None
		super(AdaGrad,self).__init__(step_size = step_size, **kwargs)

	def initialize(self, rav_param):
		self.G = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.G = adagrad_update(rav_param, grads, self.G, step_size = step_size,\
									epsilon = self.epsilon, weight_decay = self.weight_decay)
		return rav_param


@jit
def adagrad_update(rav_param, grads, G, epsilon = 1e-7, step_size = 1e-3, weight_decay = None):
	G = G + jnp.multiply(grads,grads)

	p = jnp.divide(grads,jnp.sqrt(G)+epsilon*jnp.ones_like(G))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, G
