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
# Based on http://www.cs.toronto.edu/~tijmen/csc321/slides/lecture_slides_lec6.pdf

class RMSProp(StochasticOptimizer):

	def __init__(self, step_size = 1e-2, gamma = 0.9, epsilon = 1e-7, **kwargs):
		self.gamma = gamma
		self.epsilon = epsilon
		self.v = None
		super(RMSProp,self).__init__(step_size = step_size, **kwargs)

	def initialize(self, rav_param):
		self.v = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.v = rmsprop_update(rav_param, grads, self.v, step_size = step_size,\
									gamma = self.gamma, epsilon = self.epsilon,\
									weight_decay = self.weight_decay)
		return rav_param


@jit
def rmsprop_update(rav_param, grads, v, epsilon = 1e-7, step_size = 1e-3, gamma = 0.9,\
					weight_decay = None):
	v = gamma*v + (1-gamma)*jnp.multiply(grads,grads)

	p = jnp.divide(grads,jnp.sqrt(v)+epsilon*jnp.ones_like(v))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, v
