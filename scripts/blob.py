#!/usr/bin/env python3
'''
Pack and unpack blobs from the command line.

    $ blob.py pack '%2i%6i0%lw' 0b11 0x1234
    c03412
    $ blob.py unpack '%2i%6i0%lw' c03412
    3 (0x3)
    4660 (0x1234)
'''
import os
import sys
import logging

from bitblob import BitFormat, BlobException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} pack <format> [values...]
       {progname} unpack <format> <hex data>

The values for pack are

 - integers in any base python understands (12, 0x0c, 0b1100, 0o14)
 - comma separated integers for fields with the pointer flag (1,2,3,4)
 - strings prefixed by "s:" (s:hello) or raw bytes in hex prefixed by "x:" (x:cafe)

Set the DEBUG environment variable to see what happens.''')
    sys.exit(1)


def parse_value(text):
    if text.startswith('s:'):
        return text[2:].encode()
    if text.startswith('x:'):
        return bytes.fromhex(text[2:])
    if ',' in text:
        return [int(_, 0) for _ in text.split(',') if _]

    return int(text, 0)


def format_value(value):
    if isinstance(value, bytes):
        return repr(value)
    if isinstance(value, list):
        return ','.join(str(_) for _ in value)

    return f'{value} (0x{value:x})'


def main(argv):
    if len(argv) < 3 or argv[1] not in ('pack', 'unpack'):
        usage(argv[0])

    command, fmt, args = argv[1], argv[2], argv[3:]

    try:
        blob_format = BitFormat(fmt)

        if command == 'pack':
            blob = blob_format.pack([parse_value(_) for _ in args])
            print(blob.data.hex())
        else:
            if len(args) != 1:
                usage(argv[0])
            for value in blob_format.unpack(bytes.fromhex(args[0])):
                print(format_value(value))
    except ValueError as e:
        logger.error(f'invalid value: {e}')
        return 1
    except BlobException as e:
        logger.error(e)
        return 2

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
