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
# https://arxiv.org/abs/1412.6980

class Adam(StochasticOptimizer):

	def __init__(self, step_size = 1e-3, beta_1 = 0.9, beta_2 = 0.999, epsilon = 1e-8, **kwargs):
		self.beta_1 = beta_1
		self.beta_2 = beta_2
		self.epsilon = epsilon
		self.m = None
		self.v = None
		super(Adam,self).__init__(step_size = step_size, **kwargs)

	def initialize(self, rav_param):
		self.m = jnp.zeros_like(rav_param)
		self.v = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.m, self.v = adam_update(rav_param, grads, self.m, self.v, self.iteration,\
									beta_1 = self.beta_1, beta_2 = self.beta_2, step_size = step_size,\
									epsilon = self.epsilon, weight_decay = self.weight_decay)
		return rav_param


@jit
def adam_update(rav_param, grads, m, v, iteration,\
		beta_1 = 0.9, beta_2 = 0.999, epsilon = 1e-8, step_size = 1e-3, weight_decay = None):
	m = beta_1*m + (1-beta_1)*grads
	v = beta_2*v + (1-beta_2)*jnp.multiply(grads,grads)

	m_hat = m/(1. - beta_1**iteration)
	v_hat = v/ (1. - beta_2**iteration)
	p = jnp.divide(m_hat,jnp.sqrt(v_hat)+epsilon*jnp.ones_like(v_hat))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, m, v


################################################################################
# Infinity norm variant, section 7 of the Adam paper

class AdaMax(Adam):

	def initialize(self, rav_param):
		self.m = jnp.zeros_like(rav_param)
		self.u = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.m, self.u = adamax_update(rav_param, grads, self.m, self.u, self.iteration,\
									beta_1 = self.beta_1, beta_2 = self.beta_2, step_size = step_size,\
									epsilon = self.epsilon, weight_decay = self.weight_decay)
		return rav_param


@jit
def adamax_update(rav_param, grads, m, u, iteration,\
		beta_1 = 0.9, beta_2 = 0.999, epsilon = 1e-8, step_size = 1e-3, weight_decay = None):
	m = beta_1*m + (1-beta_1)*grads
	u = jnp.maximum(beta_2*u, jnp.abs(grads))

	m_hat = m/(1. - beta_1**iteration)
	p = jnp.divide(m_hat,u+epsilon*jnp.ones_like(u))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, m, u


################################################################################
# https://openreview.net/forum?id=ryQu7f-RZ

class AMSGrad(Adam):

	def initialize(self, rav_param):
		super(AMSGrad,self).initialize(rav_param)
		self.v_max = jnp.zeros_like(rav_param)

	def update(self, rav_param, grads, step_size):
		rav_param, self.m, self.v, self.v_max = amsgrad_update(rav_param, grads, self.m, self.v,\
									self.v_max, self.iteration, beta_1 = self.beta_1, beta_2 = self.beta_2,\
									step_size = step_size, epsilon = self.epsilon,\
									weight_decay = self.weight_decay)
		return rav_param


@jit
def amsgrad_update(rav_param, grads, m, v, v_max, iteration,\
		beta_1 = 0.9, beta_2 = 0.999, epsilon = 1e-8, step_size = 1e-3, weight_decay = None):
	m = beta_1*m + (1-beta_1)*grads
	v = beta_2*v + (1-beta_2)*jnp.multiply(grads,grads)
	v_max = jnp.maximum(v_max, v)

	m_hat = m/(1. - beta_1**iteration)
	v_hat = v_max/(1. - beta_2**iteration)
	p = jnp.divide(m_hat,jnp.sqrt(v_hat)+epsilon*jnp.ones_like(v_hat))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, m, v, v_max


################################################################################
# Adam with Nesterov momentum, http://cs229.stanford.edu/proj2015/054_report.pdf

class Nadam(Adam):

	def update(self, rav_param, grads, step_size):
		rav_param, self.m, self.v = nadam_update(rav_param, grads, self.m, self.v, self.iteration,\
									beta_1 = self.beta_1, beta_2 = self.beta_2, step_size = step_size,\
									epsilon = self.epsilon, weight_decay = self.weight_decay)
		return rav_param


@jit
def nadam_update(rav_param, grads, m, v, iteration,\
		beta_1 = 0.9, beta_2 = 0.999, epsilon = 1e-8, step_size = 1e-3, weight_decay = None):
	m = beta_1*m + (1-beta_1)*grads
	v = beta_2*v + (1-beta_2)*jnp.multiply(grads,grads)

	m_hat = beta_1*m/(1. - beta_1**(iteration + 1)) + (1-beta_1)*grads/(1. - beta_1**iteration)
	v_hat = v/ (1. - beta_2**iteration)
	p = jnp.divide(m_hat,jnp.sqrt(v_hat)+epsilon*jnp.ones_like(v_hat))

	if weight_decay is not None:
		p += weight_decay*rav_param

	rav_param -= step_size *p
	return rav_param, m, v
