import os
import sys
import runpy

import pytest

import funcopt

applications = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'applications')
parabola_driver = os.path.join(applications, 'parabola', 'parabola_driver.py')
logistic_driver = os.path.join(applications, 'logistic_regression', 'logistic_driver.py')

def run_driver(monkeypatch, path, *arguments):
	monkeypatch.setattr(sys, 'argv', [path] + list(arguments))
	return runpy.run_path(path, run_name = '__main__')

@pytest.mark.parametrize('method', sorted(set(funcopt.config.__methods__) - {'scd'}))
def test_parabola_driver(method, monkeypatch, capsys):
	namespace = run_driver(monkeypatch, parabola_driver, '--method', method,\
							'--max_iterations', '400', '--print_freq', '100')

	assert namespace['objective'] >= 147.
	assert 'Final objective: ' in capsys.readouterr().out

def test_parabola_driver_rejects_scd(monkeypatch, capsys):
	with pytest.raises(SystemExit):
		run_driver(monkeypatch, parabola_driver, '--method', 'scd')
	assert 'sparse function' in capsys.readouterr().err

	with pytest.raises(SystemExit):
		run_driver(monkeypatch, parabola_driver, '--method', 'newton')

@pytest.mark.parametrize('lr_schedule', ['piecewise', 'cosine'])
def test_logistic_driver_gd_schedule(lr_schedule, monkeypatch):
	namespace = run_driver(monkeypatch, logistic_driver, '--method', 'gd', '--n_data', '100',\
							'--num_epochs', '5', '--lr_schedule', lr_schedule)

	n_train = namespace['n_train']
	optimizer = namespace['optimizer']
	# the schedule peaks at the same per example step size as the constant step
	peak = max(float(optimizer.lr_schedule(i)) for i in range(namespace['num_train_steps']))
	assert peak == pytest.approx(1e-2/n_train, rel = 0.1)
	assert peak <= 1e-2/n_train*(1. + 1e-6)
	assert namespace['objective'] < optimizer.logger['cost'][0]
