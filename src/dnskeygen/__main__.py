"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that asks interactively for whatever
the command line left out, unless running in non-interactive mode.

Typical usage example:

    dnskeygen keygen --zone example.com --algorithm RSASHA256 --keysize 2048
    OR
    python -m dnskeygen convert --private-key Kexample.com.+008+12345.private
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import dnskeygen
from dnskeygen import algorithms
from dnskeygen import export
from dnskeygen import pem
from dnskeygen.errors import DNSKeyError
from dnskeygen.keygen import generate
from dnskeygen.record import DNSKEYRecord
from dnskeygen.record import SEP
from dnskeygen.record import ZONE_KEY

logger = logging.getLogger("dnskeygen")

DEFAULT_RSA_KEYSIZE = 2048


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in dnskeygen.",
            choices=["keygen", "convert"],
        ),
    "keygen":
        HelpData("DNSKEY pair generation utility."),
    "convert":
        HelpData("Private key file to PKCS#8 PEM conversion utility."),
    "zone":
        HelpData(description="Owner name of the DNSKEY record (the zone).", format=str),
    "algorithm":
        HelpData(
            description="DNSSEC signing algorithm.",
            choices=[algorithms.mnemonic(alg) for alg in algorithms.PROFILES],
            default=algorithms.mnemonic(algorithms.Algorithm.ECDSAP256SHA256),
        ),
    "keysize":
        HelpData(
            description=f"Key size (in bits). 0 picks {DEFAULT_RSA_KEYSIZE} for RSA and the curve size for ECDSA.",
            format=int,
            advanced=True,
            default=0,
        ),
    "ksk":
        HelpData(
            description="Set the Secure Entry Point flag (Key Signing Key)?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "ttl":
        HelpData(description="TTL of the DNSKEY record.", format=int, advanced=True, default=3600),
    "directory":
        HelpData(
            description="Directory to write the key files to.",
            format=pathlib.Path,
            advanced=True,
            default=pathlib.Path("."),
        ),
    "pem":
        HelpData(
            description="Also write the private key as PKCS#8 PEM?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for RSA public keys.",
            format=int,
            advanced=True,
            default=65537,
        ),
    "private_key":
        HelpData(
            description="Location of the v1.3 private key file.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="Location of the PEM file. Empty derives it from the private key file.",
            format=str,
            advanced=True,
            default="",
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("zone", "algorithm", "keysize", "ksk", "ttl", "directory", "pem", "pub_exponent"),
    "convert": ("private_key", "output"),
}

corep = argparse.ArgumentParser(prog="dnskeygen")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {dnskeygen.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", action="store_true", help="Log generation details to stderr")
corep.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", help=help_dict["keygen"].description)
keygen.add_argument("--zone", "-z", type=help_dict["zone"].format, help=help_dict["zone"].description)
keygen.add_argument("--algorithm", "-A", choices=help_dict["algorithm"].choices,
                    help=help_dict["algorithm"].description)
keygen.add_argument("--keysize", "-b", type=help_dict["keysize"].format, help=help_dict["keysize"].description)
keygen.add_argument("--ksk", "-k", action="store_const", const="Y", help=help_dict["ksk"].description)
keygen.add_argument("--ttl", "-t", type=help_dict["ttl"].format, help=help_dict["ttl"].description)
keygen.add_argument("--directory", "-K", type=help_dict["directory"].format, help=help_dict["directory"].description)
keygen.add_argument("--pem", action="store_const", const="Y", help=help_dict["pem"].description)
keygen.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)

convert = commands.add_parser("convert", help=help_dict["convert"].description)
convert.add_argument("--private-key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
convert.add_argument("--output", "-O", type=help_dict["output"].format, help=help_dict["output"].description)


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


def default_keysize(profile: algorithms.AlgorithmProfile) -> int:
    """The key size used when none was requested."""
    if profile.curve is not None:
        return profile.curve.bits
    return DEFAULT_RSA_KEYSIZE


def sibling(file: pathlib.Path, suffix: str) -> pathlib.Path:
    """Swaps a BIND key file extension, keeping the dots inside the zone name intact."""
    name = file.name
    for ext in (".private", ".key"):
        if name.endswith(ext):
            name = name[:-len(ext)]
            break
    return file.with_name(name + suffix)


def confirm_targets(targets: list[pathlib.Path], args: argparse.Namespace, pstatus: tuple[bool, bool],
                    prntr: typing.Callable) -> bool:
    """Checks whether existing destination files may be overwritten."""
    if not any(target.exists() for target in targets):
        return True
    rs = getattr(args, "overwrite", None)
    if rs is None:
        rs = choice_handler("overwrite", pstatus, prntr)
    if rs == "N":
        print("Destination key files already exist!", file=sys.stderr)
        return False
    return True


def run_keygen(args: argparse.Namespace, pstatus: tuple[bool, bool], pspr: typing.Callable) -> bool:
    algorithm = algorithms.from_mnemonic(args.algorithm)
    bits = int(args.keysize) or default_keysize(algorithms.profile_for(algorithm))
    flags = ZONE_KEY | SEP if args.ksk == "Y" else ZONE_KEY
    rr = DNSKEYRecord(args.zone, algorithm, flags, int(args.ttl))
    pk = generate(rr, bits, int(args.pub_exponent))
    base = pathlib.Path(args.directory) / rr.basename()
    files = {
        sibling(base, ".key"): rr.to_text() + "\n",
        sibling(base, ".private"): export.private_key_string(rr, pk),
    }
    if args.pem == "Y":
        files[sibling(base, ".pem")] = pem.private_key_pem(pk)
    if not confirm_targets(list(files), args, pstatus, pspr):
        return False
    for target, content in files.items():
        if target.suffix == ".key":
            target.write_text(content, encoding="ascii")
        else:
            pem.write_secret_file(target, content)
        logger.info("Wrote %s", target)
    pspr("\nKey pair generated!")
    print(rr.basename())
    return True


def run_convert(args: argparse.Namespace, pstatus: tuple[bool, bool], pspr: typing.Callable) -> bool:
    source = pathlib.Path(args.private_key)
    _, pk = export.read_private_key_string(source.read_text(encoding="ascii"))
    target = pathlib.Path(args.output) if args.output else sibling(source, ".pem")
    if not confirm_targets([target], args, pstatus, pspr):
        return False
    pem.write_secret_file(target, pem.private_key_pem(pk))
    logger.info("Wrote %s", target)
    pspr("\nPrivate key converted!")
    print(target)
    return True


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to dnskeygen!\n")
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
    try:
        match args.subcommand:
            case "keygen":
                done = run_keygen(args, pstatus, pspr)
            case "convert":
                done = run_convert(args, pstatus, pspr)
    except DNSKeyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    if not done:
        sys.exit(1)
    pspr("Thank you for using dnskeygen!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
