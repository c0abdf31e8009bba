#!/usr/bin/env python3
"""
simple-aes-cbc Command Line Interface

Encrypts and decrypts short text with a 16-byte shared secret.

Usage:
    simple-aes-cbc encrypt --key KEY [--iv IV] [TEXT]
    simple-aes-cbc decrypt --key KEY [--iv IV] [CIPHERTEXT]
    simple-aes-cbc --version
    simple-aes-cbc --help

TEXT / CIPHERTEXT are read from stdin when omitted.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .. import __version__
from ..config import AesCbcConfig, IvPolicy
from ..crypto import CryptoError, CryptographyProvider, SimpleAesCbc
from ..crypto.material import KeyInput

logger = logging.getLogger(__name__)


class AesCbcCLI:
    """Main CLI application for simple-aes-cbc."""

    def run(self, args: list) -> int:
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed = parser.parse_args(args)

        logging.basicConfig(
            level=logging.DEBUG if parsed.verbose else logging.WARNING,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if hasattr(parsed, 'func'):
            try:
                return parsed.func(parsed)
            except (CryptoError, ValueError) as e:
                logger.debug("Command failed", exc_info=True)
                print(f"Error: {e}", file=sys.stderr)
                return 1
        else:
            parser.print_help()
            return 0

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="simple-aes-cbc",
            description="AES-CBC encryption of short text with a 16-byte secret",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    simple-aes-cbc encrypt --key 1234567890123456 "hello my friend"
    simple-aes-cbc decrypt --key 1234567890123456 <base64 ciphertext>
    simple-aes-cbc encrypt --key-hex 000102030405060708090a0b0c0d0e0f --iv 6543210987654321 secret
    echo -n secret | simple-aes-cbc encrypt --key 1234567890123456 --urlsafe
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'simple-aes-cbc v{__version__}'
        )
        parser.add_argument('--verbose', '-v', action='store_true',
                            help='Enable debug logging')

        subparsers = parser.add_subparsers(title='commands', dest='command')

        self.add_encrypt_command(subparsers)
        self.add_decrypt_command(subparsers)

        return parser

    def _add_common_arguments(self, cmd: argparse.ArgumentParser) -> None:
        key_group = cmd.add_mutually_exclusive_group(required=True)
        key_group.add_argument('--key', '-k', help='16-character key (UTF-8 encoded)')
        key_group.add_argument('--key-hex', help='16-byte key as hex')

        iv_group = cmd.add_mutually_exclusive_group()
        iv_group.add_argument('--iv', help='16-character IV (UTF-8 encoded)')
        iv_group.add_argument('--iv-hex', help='16-byte IV as hex')

        cmd.add_argument('--require-iv', action='store_true',
                         help='Fail instead of reusing the key as IV')
        cmd.add_argument('--format', '-f', default='base64',
                         choices=['base64', 'raw'],
                         help='Ciphertext encoding')
        cmd.add_argument('--urlsafe', action='store_true',
                         help='Use the URL-safe base64 alphabet')
        cmd.add_argument('data', nargs='?',
                         help='Input text (read from stdin if omitted)')

    def add_encrypt_command(self, subparsers):
        """Add encrypt command to parser."""
        cmd = subparsers.add_parser('encrypt', help='Encrypt text')
        self._add_common_arguments(cmd)
        cmd.set_defaults(func=self.handle_encrypt)

    def add_decrypt_command(self, subparsers):
        """Add decrypt command to parser."""
        cmd = subparsers.add_parser('decrypt', help='Decrypt ciphertext')
        self._add_common_arguments(cmd)
        cmd.set_defaults(func=self.handle_decrypt)

    def build_context(self, args) -> SimpleAesCbc:
        """Create an AES-CBC context from parsed arguments."""
        key = bytes.fromhex(args.key_hex) if args.key_hex else args.key

        iv: Optional[KeyInput] = None
        if args.iv_hex:
            iv = bytes.fromhex(args.iv_hex)
        elif args.iv:
            iv = args.iv

        config = AesCbcConfig(
            iv_policy=IvPolicy.REQUIRE_EXPLICIT if args.require_iv else IvPolicy.KEY_AS_IV,
            urlsafe_base64=args.urlsafe,
        )
        return SimpleAesCbc(key, CryptographyProvider(), iv, config=config)

    @staticmethod
    def read_input(args) -> str:
        if args.data is not None:
            return args.data
        text = sys.stdin.read()
        # drop the single newline added by echo or by our own print()
        return text[:-1] if text.endswith("\n") else text

    # Command handlers

    def handle_encrypt(self, args):
        """Handle encrypt command."""
        aes = self.build_context(args)
        data = self.read_input(args)

        if args.format == 'base64':
            result = asyncio.run(aes.encrypt_string_to_base64(data))
        else:
            result = asyncio.run(aes.encrypt_string(data))

        print(result)
        return 0

    def handle_decrypt(self, args):
        """Handle decrypt command."""
        aes = self.build_context(args)
        data = self.read_input(args)

        if args.format == 'base64':
            result = asyncio.run(aes.decrypt_string_from_base64(data.strip()))
        else:
            result = asyncio.run(aes.decrypt_string(data))

        print(result)
        return 0


def main():
    """Main entry point."""
    cli = AesCbcCLI()
    sys.exit(cli.run(sys.argv[1:]))


if __name__ == "__main__":
    main()
