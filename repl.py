#!/usr/bin/python3

import logging
import sys

import config
import lib
from errors import RTError
from interpreter import Interpreter


def report(error):
	print(error.as_string(), file=sys.stderr)


def run_file(path):
	with open(path, 'r', encoding='utf-8') as f:
		code = f.read()

	_, error = lib.run(path, code)
	if error:
		report(error)
		if isinstance(error, RTError):
			return config.EXIT_SOFTWARE_ERROR
		return config.EXIT_DATA_ERROR
	return 0


def run_prompt():
	interpreter = Interpreter()

	while True:
		try:
			text = input('repl@treelox > ')
		except EOFError:
			print()
			return 0
		except KeyboardInterrupt:
			return 1

		if text.strip() == '':
			continue

		_, error = lib.run('<stdin>', text, interpreter)
		if error:
			report(error)


def main():
	logging.basicConfig(level=config.LOG_LEVEL)

	if len(sys.argv) > 2:
		print('Usage: repl [script]', file=sys.stderr)
		sys.exit(64)
	if len(sys.argv) == 2:
		sys.exit(run_file(sys.argv[1]))
	sys.exit(run_prompt())


if __name__ == '__main__':
	main()
