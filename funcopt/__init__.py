# This file is part of the funcopt package.
#
# funcopt is free software; you can redistribute it and/or modify
# it under the terms of the Apache license.
#
# Author: Tom O'Leary-Roseberry
# Contact: tom.olearyroseberry@utexas.edu

import jax
# parameters are float64 numpy buffers, keep the jitted updates in double precision
jax.config.update('jax_enable_x64', True)

from .function import Function, SeparableFunction, SparseFunction, check_function, with_gradient

from .autodiff import JaxFunction, JaxSeparableFunction

from .optimizer import Optimizer, StochasticOptimizer

from .gradientDescent import GradientDescent, SGD, MomentumSGD, NesterovMomentumSGD

from .adaGrad import AdaGrad

from .rmsProp import RMSProp

from .adam import Adam, AdaMax, AMSGrad, Nadam

from .lbfgs import LBFGS

from .svrg import SVRG

from .cmaes import CMAES

from .scd import SCD

from .callbacks import Callback, PrintLoss, EarlyStopAtMinLoss, ProgressBar, StoreBestCoordinates

from .problems import ParabolaSumFunction, SphereFunction, RosenbrockFunction,\
						GeneralizedRosenbrockFunction, LogisticRegressionFunction

from . import config
