"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the missing components of the CLI interaction, including the option that none are included.
Keys travel as plain decimal numbers, ciphertexts and signatures as base64 envelopes.

Typical usage example:

    textrsa keygen --bits 1024
    OR
    python -m textrsa encrypt -N 3233 -E 17 --message "Hi"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import typing

import textrsa
from textrsa import envelope


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in textrsa.",
            choices=["keygen", "encrypt", "decrypt", "sign", "verify"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "sign":
        HelpData("Signing utility."),
    "verify":
        HelpData("Signature verification utility."),
    "modulus":
        HelpData(
            description="The modulus n of the key.",
            format=int,
        ),
    "public_exponent":
        HelpData(
            description="The public exponent e of the key.",
            format=int,
        ),
    "private_exponent":
        HelpData(
            description="The private exponent d of the key.",
            format=int,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "encoding":
        HelpData(description="Payload encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
    "bits":
        HelpData(
            description="Bit length of each prime. The modulus is about twice as long.",
            format=int,
            default=1024,
        ),
    "signature":
        HelpData(
            description="The signature envelope to validate against the payload and public key.",
            format=str,
        ),
}

needs = {
    "keygen": ("bits",),
    "encrypt": ("modulus", "public_exponent", "message", "encoding"),
    "decrypt": ("modulus", "private_exponent", "message", "encoding"),
    "sign": ("modulus", "private_exponent", "message", "encoding"),
    "verify": ("modulus", "public_exponent", "message", "signature", "encoding"),
}

modulus = argparse.ArgumentParser(add_help=False)
modulus.add_argument("--modulus", "-N", type=help_dict["modulus"].format, help=help_dict["modulus"].description)
pubexp = argparse.ArgumentParser(add_help=False)
pubexp.add_argument("--public-exponent",
                    "-E",
                    dest="public_exponent",
                    type=help_dict["public_exponent"].format,
                    help=help_dict["public_exponent"].description)
privexp = argparse.ArgumentParser(add_help=False)
privexp.add_argument("--private-exponent",
                     "-D",
                     dest="private_exponent",
                     type=help_dict["private_exponent"].format,
                     help=help_dict["private_exponent"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
corep = argparse.ArgumentParser(prog="textrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {textrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", help=help_dict["keygen"].description)
keygen.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
keygen.add_argument("--exponent", type=int, help="Starting candidate for the public exponent.")

encrypt = commands.add_parser("encrypt",
                              parents=[modulus, pubexp, payloads, encp],
                              help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt",
                              parents=[modulus, privexp, payloads, encp],
                              help=help_dict["decrypt"].description)
decrypt.add_argument("--strict", action="store_true", help="Validate every padding byte.")
sign = commands.add_parser("sign", parents=[modulus, privexp, payloads, encp], help=help_dict["sign"].description)
verify = commands.add_parser("verify", parents=[modulus, pubexp, payloads, encp], help=help_dict["verify"].description)
verify.add_argument("--signature", "-S", type=help_dict["signature"].format, help=help_dict["signature"].description)


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
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
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


def check_message(mess: str, enc) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to textrsa!\n")
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
    pspr("\nInput Complete! Executing...")
    match args.subcommand:
        case "keygen":
            rpk = textrsa.generate(args.bits, exponent_hint=getattr(args, "exponent", None))
            pspr("\nKey pair generated!")
            print(f"n: {rpk.n}")
            print(f"e: {rpk.e}")
            print(f"d: {rpk.d}")
        case "encrypt":
            args.message = check_message(args.message, args.encoding)
            rpu = textrsa.RSAKey(args.modulus.bit_length(), args.modulus, e=args.public_exponent)
            ciph = rpu.encrypt(args.message.encode(args.encoding))
            pspr("Ciphertext:")
            print(envelope.wrap(ciph, "encryption"))
        case "decrypt":
            args.message = check_message(args.message, "ascii")
            rpk = textrsa.RSAKey(args.modulus.bit_length(), args.modulus, d=args.private_exponent)
            clear = rpk.decrypt(envelope.unwrap(args.message.strip(), "encryption"), getattr(args, "strict", False))
            pspr("Cleartext:")
            print(clear.decode(args.encoding))
        case "sign":
            args.message = check_message(args.message, args.encoding)
            rpk = textrsa.RSAKey(args.modulus.bit_length(), args.modulus, d=args.private_exponent)
            signature = rpk.sign(args.message.encode(args.encoding))
            pspr("Signature:")
            print(envelope.wrap(signature, "signature"))
        case "verify":
            args.message = check_message(args.message, args.encoding)
            rpu = textrsa.RSAKey(args.modulus.bit_length(), args.modulus, e=args.public_exponent)
            signature = envelope.unwrap(args.signature.strip(), "signature")
            if rpu.check_signature(args.message.encode(args.encoding), signature):
                pspr("Signature Verified!")
            else:
                print("Signature Verification Failed!")
                sys.exit(1)
    pspr("Thank you for using textrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
