"""Command-line interface for the monitoring plugins."""

import logging
import sys
from typing import List, Optional

import click

from .config.config_manager import ConfigManager
from .config.config_validator import UsageError
from .core.kafka_isr import KafkaCommandError, KafkaIsrChecker
from .core.models import Status
from .core.monitor import JobStatusMonitor
from .utils.formatters import format_isr_line, format_status_line, reportable_status

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration.

    Console logging goes to stderr, stdout carries the plugin output line.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console handler on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def log_options(func):
    """Add the shared logging options to a command."""
    func = click.option('--log-file', help='Also write diagnostic logs to this file')(func)
    func = click.option('--log-level', default='WARNING', show_default=True,
                        type=click.Choice(LOG_LEVELS, case_sensitive=False),
                        help='Diagnostic logging level, logs go to stderr')(func)
    return func


@click.command(context_settings=CONTEXT_SETTINGS, epilog=(
    "Ages are measured from each file's last modification time, since file "
    "creation time is not available on every platform. An empty directory is "
    "checked by its own modification time."))
@click.option('--dir', '-d', 'directories', multiple=True, metavar='DIRECTORY',
              help='Directory to check, may be repeated')
@click.option('-w', 'warning', metavar='INT', help='Warning age threshold  [default: 26]')
@click.option('-c', 'critical', metavar='INT', help='Critical age threshold  [default: 52]')
@click.option('-t', 'time_unit', metavar='UNIT',
              help='Threshold unit: seconds, minutes, hours or days  [default: hours]')
@click.option('-V', 'verbose', is_flag=True, help='Report every checked file, not only stale ones')
@click.option('--pattern', '-p', metavar='REGEX',
              help='Regular expression the last line of every file must contain')
@click.option('--exclude', '-x', 'excludes', multiple=True, metavar='NAME',
              help='File name to skip, may be repeated')
@log_options
def check_jobs_status(directories, warning, critical, time_unit, verbose, pattern, excludes,
                      log_level: str, log_file: Optional[str]) -> int:
    """Check the age and last-line content of job output files.

    Files older than the warning or critical threshold raise the status
    accordingly. With --pattern the last line of each file must match, and
    anything after a '|' on that line is emitted as performance data.
    """
    setup_logging(log_level, log_file)

    config = ConfigManager().build(
        directories=directories,
        warning=warning,
        critical=critical,
        time_unit=time_unit,
        verbose=verbose,
        pattern=pattern,
        excludes=excludes
    )

    result = JobStatusMonitor(config).run()

    click.echo(format_status_line(result, config))
    return int(reportable_status(result.overall_status))


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('--bootstrap-server', '-b', metavar='HOST:PORT', help='Kafka broker to query')
@click.option('--zookeeper', '-z', metavar='HOST:PORT', help='ZooKeeper to query, for older clusters')
@click.option('--topic', '-T', help='Only check this topic')
@click.option('--kafka-topics', default='kafka-topics.sh', show_default=True,
              help='Path to the kafka-topics executable')
@click.option('--timeout', default=30, show_default=True, type=int,
              help='Seconds to wait for kafka-topics')
@click.option('-V', 'verbose', is_flag=True, help='List every partition, not only under-replicated ones')
@log_options
def check_kafka_isr(bootstrap_server: Optional[str], zookeeper: Optional[str], topic: Optional[str],
                    kafka_topics: str, timeout: int, verbose: bool,
                    log_level: str, log_file: Optional[str]) -> int:
    """Check that every Kafka partition has its full replica set in sync."""
    setup_logging(log_level, log_file)

    try:
        checker = KafkaIsrChecker(
            kafka_topics=kafka_topics,
            bootstrap_server=bootstrap_server,
            zookeeper=zookeeper,
            topic=topic,
            timeout=timeout
        )
    except ValueError as e:
        raise UsageError(str(e))

    result = checker.check()

    click.echo(format_isr_line(result, verbose))
    return int(result.status)


def _usage(command: click.Command, prog_name: str) -> str:
    return click.Context(command, info_name=prog_name, **command.context_settings).get_usage()


def _run(command: click.Command, prog_name: str, argv: Optional[List[str]]) -> int:
    """Invoke a plugin command and map every failure to a Nagios exit code."""
    args = list(sys.argv[1:] if argv is None else argv)

    # Bare invocation gets the usage text
    if not args:
        click.echo("UNKNOWN: No arguments provided.")
        click.echo(_usage(command, prog_name))
        return int(Status.UNKNOWN)

    try:
        return int(command.main(args=args, prog_name=prog_name, standalone_mode=False))
    except click.UsageError as e:
        # Unknown flag, stray argument or missing option value
        click.echo(f"UNKNOWN: {e.format_message()}")
        click.echo(e.ctx.get_usage() if e.ctx is not None else _usage(command, prog_name))
        return int(Status.UNKNOWN)
    except (UsageError, KafkaCommandError) as e:
        click.echo(f"UNKNOWN: {e}")
        return int(Status.UNKNOWN)
    except Exception as e:
        # Never leave the monitoring system with a traceback exit code
        logging.getLogger(__name__).exception("Check failed")
        click.echo(f"UNKNOWN: {e}")
        return int(Status.UNKNOWN)


def run_jobs_status(argv: Optional[List[str]] = None) -> int:
    """Run check_jobs_status and return its exit code."""
    return _run(check_jobs_status, 'check_jobs_status', argv)


def run_kafka_isr(argv: Optional[List[str]] = None) -> int:
    """Run check_kafka_isr and return its exit code."""
    return _run(check_kafka_isr, 'check_kafka_isr', argv)


def main():
    """check_jobs_status entry point."""
    sys.exit(run_jobs_status())


def kafka_main():
    """check_kafka_isr entry point."""
    sys.exit(run_kafka_isr())


if __name__ == '__main__':
    main()
