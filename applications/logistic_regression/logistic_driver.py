# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import argparse

parser = argparse.ArgumentParser(description="Logistic regression on synthetic data")
parser.add_argument('-method', '--method', type=str, default='adam', help="What method")
parser.add_argument('-n_data', '--n_data', type=int, default=1000, help="number of training examples")
parser.add_argument('-dW', '--dW', type=int, default=10, help="problem dimension")
parser.add_argument('-batch_size', '--batch_size', type=int, default=32, help="gradient batch size")
parser.add_argument('-step_size', '--step_size', type=float, default=1e-2, help="What step size or 'learning rate'?")
parser.add_argument('-num_epochs', '--num_epochs', type=int, default=20, help="How many epochs")
parser.add_argument('-regularization', '--regularization', type=float, default=1e-3, help="Tikhonov regularization parameter")
parser.add_argument('-lr_schedule', '--lr_schedule', type=str, default='None', help="Use LR Schedule or do not")
parser.add_argument('-run_seed', '--run_seed', type=int, default=0, help="Seed for data generation / shuffling")
args = parser.parse_args()

import time

import numpy as np
import optax

import funcopt

################################################################################
# Get the data

random_state = np.random.RandomState(args.run_seed)
w_true = random_state.randn(args.dW)
X = random_state.randn(args.n_data, args.dW)
y = (X@w_true + 0.1*random_state.randn(args.n_data) > 0).astype(float)

n_train = int(0.8*args.n_data)
function = funcopt.LogisticRegressionFunction(X[:n_train], y[:n_train], l2 = args.regularization,\
												seed = args.run_seed)

################################################################################
# Set up the optimizer

method = args.method
assert method in ['sgd','mgd','nesterov','adagrad','rmsprop','adam','adamax','amsgrad','nadam','svrg','lbfgs','gd']

num_train_steps = args.num_epochs*int(np.ceil(n_train/args.batch_size))
# full batch gradients sum over the training set
step_size = args.step_size/n_train if method == 'gd' else args.step_size
if args.lr_schedule == 'piecewise':
	lr_schedule = optax.piecewise_constant_schedule(init_value=step_size,
							boundaries_and_scales={int(num_train_steps*0.5):0.1, int(num_train_steps*0.75):0.1})
elif args.lr_schedule == 'cosine':
	lr_schedule = optax.cosine_onecycle_schedule(transition_steps=num_train_steps, peak_value=step_size)
else:
	lr_schedule = None

callbacks = [funcopt.PrintLoss(print_freq = 1)]
if method == 'lbfgs':
	optimizer = funcopt.LBFGS(max_iterations = args.num_epochs, callbacks = callbacks)
elif method == 'gd':
	optimizer = funcopt.GradientDescent(step_size = step_size, max_iterations = args.num_epochs,\
										lr_schedule = lr_schedule, callbacks = callbacks)
elif method == 'svrg':
	optimizer = funcopt.SVRG(step_size = args.step_size, batch_size = args.batch_size,\
								max_iterations = args.num_epochs, lr_schedule = lr_schedule,\
								callbacks = callbacks)
else:
	optimizer = funcopt.config.__methods__[method](step_size = args.step_size, batch_size = args.batch_size,\
								max_iterations = num_train_steps*args.batch_size, lr_schedule = lr_schedule,\
								callbacks = callbacks)

################################################################################
# Train

params = np.zeros(args.dW)
t0 = time.time()
objective = optimizer.optimize(function, params)
runtime = time.time() - t0

print('Final objective: ',objective)
print('Train accuracy: ',function.accuracy(params, X[:n_train], y[:n_train]))
print('Test accuracy: ',function.accuracy(params, X[n_train:], y[n_train:]))
print('Runtime: ',runtime)
