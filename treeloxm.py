import logging
import sys

import config
import lib
from image import make_key, save_image

logger = logging.getLogger(__name__)


def build(fn, text, output):
    statements, locals_, error = lib.compile_source(fn, text)
    if error:
        print(error.as_string(), file=sys.stderr)
        return config.EXIT_DATA_ERROR

    save_image(statements, locals_, output, make_key(config.IMAGE_KEY))
    logger.info('built %s from %s', output, fn)
    return 0


def main():
    logging.basicConfig(level=config.LOG_LEVEL)

    if len(sys.argv) < 3:
        print("Usage: treeloxm <input> <output>", file=sys.stderr)
        sys.exit(1)

    with open(sys.argv[1], 'r', encoding='utf-8') as f:
        sys.exit(build(sys.argv[1], f.read(), sys.argv[2]))


if __name__ == '__main__':
    main()
