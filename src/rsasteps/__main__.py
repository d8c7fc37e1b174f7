"""The Command Line Interface for RSA Step-by-Step, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that asks for whatever the command
line left out, unless told to run non-interactively, in which case defaults are used or an error is raised.

Typical usage example:

    rsasteps keygen --p 17 --q 19 -P key.pem -p key.pub
    rsasteps encrypt -p key.pub --message HI --steps
    python -m rsasteps modpow --base 4 --exponent 13 --modulus 497
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

from pyasn1.error import PyAsn1Error

import rsasteps
from rsasteps.errors import RangeHasNoPrime
from rsasteps.keys import DEFAULT_PRIME_RANGE

logger = logging.getLogger("rsasteps")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Step-by-Step.",
            choices=["keygen", "encrypt", "decrypt", "modpow", "isprime"],
        ),
    "keygen":
        HelpData("Derive a key pair from two primes and show the derivation."),
    "encrypt":
        HelpData("Encrypt a text message with a public key."),
    "decrypt":
        HelpData("Decrypt a ciphertext integer with a private key."),
    "modpow":
        HelpData("Trace a modular exponentiation step by step."),
    "isprime":
        HelpData("Trial-division primality check."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "ciphertext":
        HelpData(
            description="The ciphertext integer to decrypt.",
            format=int,
        ),
    "p":
        HelpData(
            description="The first prime. Leave p and q at 0 to draw random primes from the low/high range.",
            format=int,
            default=0,
        ),
    "q":
        HelpData(
            description="The second prime, different from p. Leave p and q at 0 to draw random primes.",
            format=int,
            default=0,
        ),
    "low":
        HelpData(
            description="Lower bound for random primes.",
            format=int,
            advanced=True,
            default=DEFAULT_PRIME_RANGE[0],
        ),
    "high":
        HelpData(
            description="Upper bound for random primes.",
            format=int,
            advanced=True,
            default=DEFAULT_PRIME_RANGE[1],
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key. 0 picks the smallest valid one.",
            format=int,
            advanced=True,
            default=0,
        ),
    "base":
        HelpData(
            description="Base of the exponentiation.",
            format=int,
        ),
    "exponent":
        HelpData(
            description="Non-negative exponent.",
            format=int,
        ),
    "modulus":
        HelpData(
            description="Positive modulus.",
            format=int,
        ),
    "number":
        HelpData(
            description="The number to test.",
            format=int,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "p", "q", "low", "high", "pub_exponent"),
    "encrypt": ("public_key", "message"),
    "decrypt": ("private_key", "ciphertext"),
    "modpow": ("base", "exponent", "modulus"),
    "isprime": ("number",),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
tracing = argparse.ArgumentParser(add_help=False)
tracing.add_argument("--steps", "-s", action="store_true", help="Print every step of the modular exponentiation.")
corep = argparse.ArgumentParser(prog="rsasteps")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsasteps.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--log-level",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   default="WARNING",
                   help="Logging verbosity.")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--p", type=help_dict["p"].format, help=help_dict["p"].description)
keygen.add_argument("--q", type=help_dict["q"].format, help=help_dict["q"].description)
keygen.add_argument("--low", type=help_dict["low"].format, help=help_dict["low"].description)
keygen.add_argument("--high", type=help_dict["high"].format, help=help_dict["high"].description)
keygen.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, tracing], help=help_dict["encrypt"].description)
encrypt.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, tracing], help=help_dict["decrypt"].description)
decrypt.add_argument("--ciphertext", type=help_dict["ciphertext"].format, help=help_dict["ciphertext"].description)

modpow = commands.add_parser("modpow", help=help_dict["modpow"].description)
for _arg in needs["modpow"]:
    modpow.add_argument(f"--{_arg}", type=help_dict[_arg].format, help=help_dict[_arg].description)
isprime = commands.add_parser("isprime", help=help_dict["isprime"].description)
isprime.add_argument("--number", type=help_dict["number"].format, help=help_dict["number"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str, enc: str = "utf-8") -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def run(args: argparse.Namespace, pspr: typing.Callable) -> int:
    """Execute the fully populated subcommand and return the exit code."""
    match args.subcommand:
        case "keygen":
            if args.private_key.exists() or args.public_key.exists():
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", (args.non_interactive, args.advanced), pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return 1
            pub_exp = args.pub_exponent or None
            if args.p or args.q:
                rpk = rsasteps.RSAPrivKey(args.p, args.q, pub_exp)
            else:
                rpk = rsasteps.RSAPrivKey.generate(args.low, args.high, pub_exp)
            print("\n".join(rpk.derivation_steps()))
            rpk.export(args.private_key)
            rpk.pub.export(args.public_key)
            pspr("\nKey pair generated!")
        case "encrypt":
            message = check_message(args.message)
            rpu = rsasteps.RSAPubKey.import_key(args.public_key)
            pspr(f"Message as integer: {rsasteps.text_to_integer(message)}")
            if args.steps:
                trace = rpu.encrypt_steps(message)
                print("\n".join(trace.steps))
                ciph = trace.result
            else:
                ciph = rpu.encrypt(message)
            pspr("Ciphertext:")
            print(ciph)
        case "decrypt":
            rpk = rsasteps.RSAPrivKey.import_key(args.private_key)
            if args.steps:
                trace, clear = rpk.decrypt_steps(args.ciphertext)
                print("\n".join(trace.steps))
            else:
                clear = rpk.decrypt(args.ciphertext)
            pspr("Cleartext:")
            print(clear)
        case "modpow":
            trace = rsasteps.mod_pow_with_steps(args.base, args.exponent, args.modulus)
            print("\n".join(trace.steps))
        case "isprime":
            if not rsasteps.is_prime(args.number):
                print(f"{args.number} is not prime.")
                return 1
            print(f"{args.number} is prime.")
    return 0


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Step-by-Step!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    for flag in ("steps", "overwrite"):
        if not hasattr(args, flag):
            setattr(args, flag, None)
    pspr("\nInput Complete! Executing...")
    try:
        code = run(args, pspr)
    except (ValueError, RangeHasNoPrime, OSError, PyAsn1Error) as err:
        logger.debug("Subcommand %s failed", args.subcommand, exc_info=True)
        print(f"Error: {err}")
        sys.exit(2)
    if code:
        sys.exit(code)
    pspr("Thank you for using RSA Step-by-Step!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
