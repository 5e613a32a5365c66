import logging
import sys

import config
from image import ImageError, load_image, make_key
from interpreter import Interpreter

logger = logging.getLogger(__name__)


def main():
	logging.basicConfig(level=config.LOG_LEVEL)

	if len(sys.argv) < 2:
		print('Usage: treelox <image>', file=sys.stderr)
		sys.exit(1)

	try:
		statements, locals_ = load_image(sys.argv[1], make_key(config.IMAGE_KEY))
	except (OSError, ImageError) as e:
		logger.error('%s', e)
		sys.exit(1)

	interpreter = Interpreter(report=lambda error: print(error.as_string(), file=sys.stderr))
	if interpreter.interpret(statements, locals_):
		sys.exit(config.EXIT_SOFTWARE_ERROR)


if __name__ == '__main__':
	main()
