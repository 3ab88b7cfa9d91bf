# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import argparse

parser = argparse.ArgumentParser(description="Minimize the sum of four parabolas")
parser.add_argument('-method', '--method', type=str, default='sgd', help="What method")
parser.add_argument('-batch_size', '--batch_size', type=int, default=1, help="gradient batch size")
parser.add_argument('-step_size', '--step_size', type=float, default=1e-2, help="What step size or 'learning rate'?")
parser.add_argument('-max_iterations', '--max_iterations', type=int, default=10000, help="Iteration budget, 0 means no limit")
parser.add_argument('-tolerance', '--tolerance', type=float, default=1e-8, help="Termination tolerance on the objective")
parser.add_argument('-x0', '--x0', type=float, default=5.0, help="Initial point")
parser.add_argument('-print_freq', '--print_freq', type=int, default=10, help="Print the cost every print_freq epochs")
parser.add_argument('-run_seed', '--run_seed', type=int, default=0, help="Seed for shuffling")
args = parser.parse_args()

import numpy as np

import funcopt

################################################################################
# Run hyperparameters

method = args.method
if method not in funcopt.config.__methods__:
	parser.error('unknown method '+method)
# the parabolas have no coordinate structure
if method == 'scd':
	parser.error('scd needs a sparse function, use a separable method')

arguments = {'callbacks': [{'print_loss': {'print_freq': args.print_freq}}]}
if method in ['sgd','mgd','nesterov','adagrad','rmsprop','adam','adamax','amsgrad','nadam','svrg']:
	arguments.update(step_size = args.step_size, batch_size = args.batch_size,\
						max_iterations = args.max_iterations, tolerance = args.tolerance)
elif method == 'gd':
	arguments.update(step_size = args.step_size, max_iterations = args.max_iterations,\
						tolerance = args.tolerance)
elif method == 'cmaes':
	arguments.update(batch_size = args.batch_size, tolerance = args.tolerance, seed = args.run_seed)
else:
	arguments.update(max_iterations = args.max_iterations)

optimizer = funcopt.config.from_config({method: arguments})

################################################################################
# Optimize

function = funcopt.ParabolaSumFunction(seed = args.run_seed)
params = np.array([args.x0])

objective = optimizer.optimize(function, params)

print('Method: ',method)
print('Final coordinates: ',params)
print('Final objective: ',objective,' (expected ',function.minimum(),')')
