"""Command Line Interface for AdlTransfer (adltransfer)."""

import argparse
import enum
import os
import sys
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape

from adltransfer import __version__
from adltransfer.core.auth import DataLakeAuth, token_cache_path
from adltransfer.core.client import create_filesystem
from adltransfer.core.config import (
    DEFAULT_CONCURRENT_FILES,
    DEFAULT_PER_FILE_THREADS,
    DEFAULT_SEGMENT_LENGTH,
    ENV_PASSWORD,
    ENV_TENANT_ID,
    ENV_USER,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    default_metadata_path,
)
from adltransfer.core.secret import wrap
from adltransfer.exceptions import ParseError
from adltransfer.models.transfer import Credentials, TransferConfiguration
from adltransfer.services.transfer import DataLakeTransfer
from adltransfer.utils.helpers import validate_path_exists
from adltransfer.utils.logger import setup_logging
from adltransfer.utils.progress import (
    ProgressReporter,
    display_header,
    display_operation_summary,
    display_transfer_plan,
)

console = Console()
error_console = Console(stderr=True)

PROG = "adltransfer"

SAMPLES = f"""
##
## Samples ##
##

# Uploading all files from a local folder to Azure Data Lake Store
#   using the cached sign-in or asking for user credentials, for example,
#   upload '/data/local/' to '/MyRemotePath'
  {PROG} /data/local/ /MyRemotePath MyAdlAccountName

# Uploading all files from a local folder to Azure Data Lake Store
#   using a user name and password, for example,
#   upload '/data/local/' to '/MyRemotePath'
  {PROG} /data/local/ /MyRemotePath MyAdlAccountName -u MyUserName -p MyPassword

# Uploading a single file from a local folder to Azure Data Lake Store
#   using the cached sign-in or asking for user credentials, for example,
#   upload '/data/local/MyFile.txt' to '/MyRemotePath/MyFile.txt'
  {PROG} /data/local/MyFile.txt /MyRemotePath/MyFile.txt MyAdlAccountName

# Downloading all files from a path within Azure Data Lake Store to a local folder
#   using the cached sign-in or asking for user credentials, for example,
#   download '/MyRemotePath' to '/data/local/'
  {PROG} /MyRemotePath /data/local MyAdlAccountName -d

# Downloading all files from a path within Azure Data Lake Store to a local folder
#   using an Azure Active Directory Service Principal, for example,
#   download '/MyRemotePath' to '/data/local/'
  {PROG} /MyRemotePath /data/local MyAdlAccountName -u {{ClientId}} -t {{TenantId}} -p {{AuthenticationKey}} --spi -d
"""


class ParseAction(enum.Enum):
    """What the command line asks the program to do next."""

    CONTINUE = "continue"
    HELP = "help"
    SAMPLES = "samples"
    ERROR = "error"


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing the command line."""

    action: ParseAction
    exit_code: int = EXIT_SUCCESS
    configuration: Optional[TransferConfiguration] = None
    credentials: Optional[Credentials] = None
    verbose: bool = False


class TransferArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises ParseError instead of exiting."""

    def error(self, message):
        raise ParseError(message)


def _positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"value must be at least 1: '{value}'")
    return number


def create_argument_parser():
    """Create and configure the argument parser."""
    parser = TransferArgumentParser(
        prog=PROG,
        usage=f"{PROG} {{Source}} {{Target}} {{AccountName}} [OPTIONS]",
        description="AdlTransfer is designed for high-performance uploading and downloading\n"
        "data to and from Microsoft Azure Data Lake Store.",
        epilog=f"Credentials can also be supplied through the {ENV_USER}, "
        f"{ENV_PASSWORD} and {ENV_TENANT_ID} environment variables.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="Source Target AccountName",
        help="The source path, the target path and the Data Lake Store account name.",
    )

    auth_group = parser.add_argument_group("authentication")
    auth_group.add_argument(
        "-u",
        "--user",
        metavar="NAME",
        default=os.getenv(ENV_USER),
        help="The name of the Azure Active Directory user or the client id of the Service Principal.",
    )
    auth_group.add_argument(
        "-p",
        "--password",
        metavar="PASSWORD",
        default=os.getenv(ENV_PASSWORD),
        help="The password of the Azure Active Directory user or the authentication key of the Service Principal.",
    )
    auth_group.add_argument(
        "-t",
        "--tenant",
        metavar="ID",
        default=os.getenv(ENV_TENANT_ID),
        help="The id of the Azure Active Directory tenant.",
    )
    auth_group.add_argument(
        "-i",
        "--spi",
        "--serviceprincipal",
        dest="service_principal",
        action="store_true",
        help="Use an Azure Active Directory Service Principal to authenticate.",
    )

    transfer_group = parser.add_argument_group("transfer")
    transfer_group.add_argument(
        "-f",
        "--filethreads",
        metavar="COUNT",
        type=_positive_int,
        default=DEFAULT_PER_FILE_THREADS,
        help=f"The maximum count of threads used to transfer each file. Default is {DEFAULT_PER_FILE_THREADS}.",
    )
    transfer_group.add_argument(
        "-c",
        "--concurrentfiles",
        metavar="NUMBER",
        type=_positive_int,
        default=DEFAULT_CONCURRENT_FILES,
        help=f"The maximum number of concurrent file transfers. Default is {DEFAULT_CONCURRENT_FILES}.",
    )
    transfer_group.add_argument(
        "-s",
        "--segment",
        metavar="LENGTH",
        type=_positive_int,
        default=DEFAULT_SEGMENT_LENGTH,
        help=f"The maximum length of each segment in bytes. Default is {DEFAULT_SEGMENT_LENGTH} bytes (256 MB).",
    )
    transfer_group.add_argument(
        "-b",
        "--binary",
        action="store_true",
        help="Treat the input file as binary. Otherwise it is treated as delimited input.",
    )
    transfer_group.add_argument(
        "-o",
        "--overwrite",
        action="store_true",
        help="Overwrite the target, if it already exists.",
    )
    transfer_group.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Recursively transfer the source folder and its subfolders. Ignored for single files.",
    )
    transfer_group.add_argument(
        "--resume",
        action="store_true",
        help="Resume a previously interrupted transfer.",
    )
    transfer_group.add_argument(
        "-d",
        "--download",
        action="store_true",
        help="Download the file(s) instead of uploading.",
    )
    transfer_group.add_argument(
        "-m",
        "--metadata",
        metavar="PATH",
        default=None,
        help="The directory where the local transfer metadata is stored while a transfer is in progress.",
    )

    general_group = parser.add_argument_group("general")
    general_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Provide detailed status messages.",
    )
    general_group.add_argument(
        "-h",
        "-?",
        "--help",
        dest="show_help",
        action="store_true",
        help="Show this help text.",
    )
    general_group.add_argument(
        "--samples",
        dest="show_samples",
        action="store_true",
        help="Show command line samples.",
    )

    return parser


def parse_arguments(tokens):
    """Turn command line tokens into a ParseOutcome.

    Help, samples and validation failures are printed here; the outcome tells
    the caller whether to continue and which exit code to use otherwise.
    """
    parser = create_argument_parser()
    try:
        args = parser.parse_intermixed_args(tokens)
    except ParseError as e:
        error_console.print(f"{PROG}: {escape(str(e))}", highlight=False)
        error_console.print(
            f"Try `{PROG} --help' for more information.", markup=False, highlight=False
        )
        return ParseOutcome(ParseAction.ERROR, EXIT_FAILURE)

    if args.show_samples:
        console.print(SAMPLES, markup=False, highlight=False)
        return ParseOutcome(ParseAction.SAMPLES)

    if len(args.paths) < 3 or args.show_help:
        console.print(parser.format_help(), markup=False, highlight=False)
        return ParseOutcome(ParseAction.HELP)

    source_path, target_path, account_name = args.paths[:3]

    if not args.download and validate_path_exists(source_path) not in ("file", "directory"):
        error_console.print(
            "The source file or folder does not exist.", style="red", highlight=False
        )
        return ParseOutcome(ParseAction.ERROR, EXIT_FAILURE)

    secret = wrap(args.password) if args.password is not None else None
    credentials = Credentials(
        user_name=args.user,
        secret=secret,
        tenant_id=args.tenant,
        is_service_principal=args.service_principal,
    )

    if credentials.is_service_principal and (
        not credentials.user_name or not credentials.has_secret or not credentials.tenant_id
    ):
        error_console.print(
            "Please specify the client id, tenant id and authentication key "
            "using the -u, -t and -p options.",
            style="red",
            highlight=False,
        )
        return ParseOutcome(ParseAction.ERROR, EXIT_FAILURE)

    configuration = TransferConfiguration(
        source_path=source_path,
        target_path=target_path,
        account_name=account_name,
        per_file_thread_count=args.filethreads,
        concurrent_file_count=args.concurrentfiles,
        overwrite=args.overwrite,
        resume=args.resume,
        binary=args.binary,
        recursive=args.recursive,
        download=args.download,
        max_segment_length=args.segment,
        metadata_path=args.metadata or default_metadata_path(),
    )

    return ParseOutcome(
        ParseAction.CONTINUE,
        configuration=configuration,
        credentials=credentials,
        verbose=args.verbose,
    )


def run_transfer(outcome):
    """Authenticate and run the transfer described by a successful ParseOutcome."""
    config = outcome.configuration
    credentials = outcome.credentials

    display_transfer_plan(config, outcome.verbose)

    auth = DataLakeAuth(credentials, cache_path=token_cache_path(config.metadata_path))
    try:
        filesystem = create_filesystem(auth, config.account_name)
    finally:
        if credentials.secret is not None:
            credentials.secret.clear()

    reporter = ProgressReporter(console)
    transfer = DataLakeTransfer(config, filesystem, progress=reporter)

    console.print(
        f"{'Resuming' if config.resume else 'Starting'} {config.direction}...",
        highlight=False,
    )
    with reporter:
        stats = transfer.execute()
    console.print(f"[green]{config.direction} completed.[/green]")

    display_operation_summary(stats)
    return EXIT_SUCCESS


def main(argv=None):
    """Main function to handle command-line arguments and run the transfer."""
    display_header(__version__)

    try:
        outcome = parse_arguments(sys.argv[1:] if argv is None else argv)
        if outcome.action is not ParseAction.CONTINUE:
            return outcome.exit_code

        setup_logging(outcome.verbose)
        return run_transfer(outcome)

    except Exception as e:
        error_console.print(f"[bold red]{escape(str(e))}[/bold red]")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
