# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

from typing import Any, TypeVar

import optax

from .gradientDescent import GradientDescent, SGD, MomentumSGD, NesterovMomentumSGD
from .adaGrad import AdaGrad
from .rmsProp import RMSProp
from .adam import Adam, AdaMax, AMSGrad, Nadam
from .lbfgs import LBFGS
from .svrg import SVRG
from .cmaes import CMAES
from .scd import SCD
from .callbacks import PrintLoss, EarlyStopAtMinLoss, ProgressBar, StoreBestCoordinates

__all__ = [
	'split',
	'extract',
	'schedule',
	'from_config'
]

__methods__ = {
	'gd': GradientDescent,
	'sgd': SGD,
	'mgd': MomentumSGD,
	'nesterov': NesterovMomentumSGD,
	'adagrad': AdaGrad,
	'rmsprop': RMSProp,
	'adam': Adam,
	'adamax': AdaMax,
	'amsgrad': AMSGrad,
	'nadam': Nadam,
	'lbfgs': LBFGS,
	'svrg': SVRG,
	'cmaes': CMAES,
	'scd': SCD,
}

__callbacks__ = {
	'print_loss': PrintLoss,
	'early_stop': EarlyStopAtMinLoss,
	'progress_bar': ProgressBar,
	'store_best': StoreBestCoordinates,
}

def split(config: dict[str, dict[str, Any]]) -> tuple[str, dict[str, Any]]:
	"""
	Optimizers, schedules and callbacks are configured as
		<name of the object>:
		  <arguments>

	This function checks that config follows this format and returns the name and the arguments.

	:param config: configuration for an object;
	:return: name of the object, arguments.
	"""
	if len(config) == 1:
		name, = config.keys()
		arguments = config[name]
		if arguments is None:
			arguments = dict()
		return name, arguments
	else:
		raise ValueError(
			f'config entry must contain a dictionary with exactly one field (name of the object), '
			f'got {", ".join(config.keys())}'
		)

T = TypeVar('T')
def extract(config: dict[str, dict[str, Any]], library: dict[str, T]) -> tuple[T, dict[str, Any]]:
	name, arguments = split(config)
	if name not in library:
		raise ValueError(f'{name} does not appear to be a valid object')

	return library[name], arguments


def schedule(config: dict[str, Any]):
	"""
	Resolves {optax schedule name: arguments} into the schedule.
	"""
	name, arguments = split(config)
	if not hasattr(optax, name):
		raise ValueError(f'{name} does not appear to be an optax schedule')

	return getattr(optax, name)(**arguments)


def from_config(config: dict[str, dict[str, Any]]):
	method, arguments = extract(config, library = __methods__)
	arguments = dict(arguments)

	if 'lr_schedule' in arguments:
		arguments['lr_schedule'] = schedule(arguments['lr_schedule'])

	if 'callbacks' in arguments:
		callbacks = list()
		for callback_config in arguments['callbacks']:
			callback, callback_arguments = extract(callback_config, library = __callbacks__)
			callbacks.append(callback(**callback_arguments))
		arguments['callbacks'] = callbacks

	return method(**arguments)
