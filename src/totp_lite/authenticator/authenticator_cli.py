# Copyright (c) 2025
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Google Authenticator compatible TOTP generator for the terminal.

Reads a Base32 secret, either as an argument or from a prompt, and prints the
current code.
"""

import argparse
import base64
import binascii
import logging
import os
import sys
import time
from typing import List, Optional

from totp_lite.digests import get_digest
from totp_lite.exceptions import InvalidTimestamp, TotpError
from totp_lite.otp import DEFAULT_STEP, TimeBasedOneTimePassword, validate_parameters

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Defaults, overridable from the environment and then from the command line
TOTP_STEP = os.environ.get('TOTP_STEP', str(DEFAULT_STEP))
TOTP_DIGITS = os.environ.get('TOTP_DIGITS', '6')
TOTP_ALGORITHM = os.environ.get('TOTP_ALGORITHM', 'sha1')

# 80, 128 and 160 bit secrets
VALID_SECRET_LENGTHS = (16, 26, 32)


class InvalidSecret(TotpError):
    """The Base32 secret entered by the user could not be used."""


class InvalidSetting(TotpError):
    """An environment default could not be parsed."""


def int_setting(name: str, value: str) -> int:
    try:
        return int(value)

    except ValueError as e:
        raise InvalidSetting(f'{name} must be an integer, got {value!r}') from e


def decode_secret(secret: str) -> bytes:
    """
    Decode a user-facing Base32 secret into raw key bytes.

    Args:
        secret (str): Base32 secret; case, spaces and missing padding are tolerated.

    Returns:
        bytes: The decoded secret
    """
    normalized = secret.strip().replace(' ', '').upper()
    if len(normalized) not in VALID_SECRET_LENGTHS:
        raise InvalidSecret('Invalid TOTP secret, must be 16, 26 or 32 characters.')

    padding = (-len(normalized)) % 8
    try:
        return base64.b32decode(normalized + '=' * padding, casefold=True)

    except binascii.Error as e:
        raise InvalidSecret('Invalid TOTP secret, not a Base32 string.') from e


def current_time(fixed_time: Optional[int] = None) -> int:
    return fixed_time if fixed_time is not None else int(time.time())


def generate(secret: str, args: argparse.Namespace) -> str:
    generator = TimeBasedOneTimePassword(
        decode_secret(secret), algorithm=args.algorithm, step=args.step, digits=args.digits
    )
    timestamp = current_time(args.time)
    code = generator.retrieve_code(timestamp)
    logger.debug(f'Code generated with {args.algorithm.name}, valid for {generator.seconds_remaining(timestamp)}s.')

    return code


def interactive_loop(args: argparse.Namespace) -> int:
    print('Press ctrl-c to cancel.')
    while True:
        try:
            secret = input('Enter your TOTP secret: ')

        except (KeyboardInterrupt, EOFError):
            print()
            return 0

        try:
            code = generate(secret, args)

        except TotpError as e:
            logger.debug(f'Rejected secret: {str(e)}')
            print(str(e))
            continue

        print(f'Your TOTP code: {code}')


def one_shot(secret: str, args: argparse.Namespace) -> int:
    try:
        code = generate(secret, args)

    except TotpError as e:
        logger.debug(f'Rejected secret: {str(e)}')
        print(str(e), file=sys.stderr)
        return 1

    print(code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='totp-lite',
        description='Generate the current TOTP code from a Base32 secret.'
    )
    parser.add_argument(
        'secret', nargs='?',
        help='Base32-encoded TOTP secret; prompts repeatedly when omitted'
    )
    parser.add_argument(
        '--step', type=int, default=None, help='Time step in seconds (default: $TOTP_STEP or 30)'
    )
    parser.add_argument(
        '--digits', type=int, default=None, help='Number of digits in the code (default: $TOTP_DIGITS or 6)'
    )
    parser.add_argument('--algorithm', default=TOTP_ALGORITHM, help='sha1, sha256 or sha512')
    parser.add_argument('--time', type=int, default=None, help='Unix time to use instead of the clock')
    parser.add_argument('--verbose', action='store_true', help='Log debug output')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(format='%(levelname)s %(name)s: %(message)s')
    logger.setLevel(logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.step is None:
            args.step = int_setting('TOTP_STEP', TOTP_STEP)

        if args.digits is None:
            args.digits = int_setting('TOTP_DIGITS', TOTP_DIGITS)

        args.algorithm = get_digest(args.algorithm)
        validate_parameters(args.step, args.digits)

        if args.time is not None and args.time < 0:
            raise InvalidTimestamp(f'Time must be a non-negative integer, got {args.time}')

    except TotpError as e:
        logger.debug(f'Invalid configuration: {str(e)}')
        print(str(e), file=sys.stderr)
        return 1

    logger.debug(f'Generating {args.digits} digit codes every {args.step}s with {args.algorithm.name}.')

    if args.secret is None:
        return interactive_loop(args)

    return one_shot(args.secret, args)


if __name__ == '__main__':
    raise SystemExit(main())
