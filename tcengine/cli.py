import logging
import re
import sys
from pathlib import Path

import click

from .arithmetic import ARITHMETIC_POLICIES, Policy
from .components import Components
from .config import ensure_config_exists, load_config, timecode_defaults
from .errors import TimecodeError
from .fcpxml import parse_rational_time
from .framerate import FrameRate, UpperLimit
from .timecode import Timecode
from .utils import setup_logger


class ComponentsParamType(click.ParamType):
    """Strict `[D:]HH:MM:SS:FF[.SF]` component list; `;` is accepted as a separator too."""

    name = "timecode"
    _pattern = re.compile(r"^(?:(\d+)[:; ])?(\d+)[:;](\d+)[:;](\d+)[:;](\d+)(?:\.(\d+))?$")

    def convert(self, value, param, ctx):
        if isinstance(value, Components):
            return value
        match = self._pattern.match(value.strip())
        if not match:
            self.fail(f"{value!r} is not a [D:]HH:MM:SS:FF[.SF] component list", param, ctx)
        days, hours, minutes, seconds, frames, subframes = (int(g or 0) for g in match.groups())
        return Components(days, hours, minutes, seconds, frames, subframes)


COMPONENTS = ComponentsParamType()


def _rate_options(f):
    f = click.option("--subframes", "show_subframes", is_flag=True, help="Show subframes in the output.")(f)
    f = click.option("--base", type=click.IntRange(min=1), default=None, help="Subframes base (default from config).")(f)
    f = click.option(
        "--limit",
        type=click.Choice([u.value for u in UpperLimit]),
        default=None,
        help="Upper limit (default from config).",
    )(f)
    f = click.option(
        "--rate",
        type=click.Choice([r.value for r in FrameRate]),
        default=None,
        help="Frame rate (default from config).",
    )(f)
    return f


def _timecode_options(f):
    f = click.option(
        "--policy",
        type=click.Choice([p.value for p in ARITHMETIC_POLICIES], case_sensitive=False),
        default=None,
        help="Overflow policy (default from config).",
    )(f)
    return _rate_options(f)


def _fail(error: Exception):
    logging.error("%s", error)
    click.secho(f"Error: {error}", fg="red", err=True)
    sys.exit(1)


def _settings(rate, limit, base, policy):
    """Merge command-line options over the config defaults."""
    try:
        defaults = timecode_defaults(load_config())
    except TimecodeError as e:
        _fail(e)
    logging.getLogger().setLevel(defaults.log_level)

    return (
        FrameRate(rate) if rate else defaults.frame_rate,
        UpperLimit(limit) if limit else defaults.upper_limit,
        base if base is not None else defaults.subframes_base,
        Policy(policy.lower()) if policy else defaults.policy,
    )


@click.group()
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also log to this file.")
def cli(log_file):
    """tcengine – SMPTE timecode arithmetic CLI."""
    if log_file:
        setup_logger(log_file)
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")


@cli.command("init-config")
@click.option("--overwrite", is_flag=True, help="Overwrite existing config if present.")
def init_config(overwrite):
    """(Re)write a template YAML config at the fixed path and print its location."""
    path = ensure_config_exists(overwrite=overwrite)
    click.echo(f"Config written to: {path}")


@cli.command("rates")
def rates():
    """List the supported frame rates."""
    for rate in FrameRate:
        click.echo(
            f"{rate.value:<8} {rate.string_value_verbose:<22} "
            f"timebase={rate.max_frames:<3} group={rate.compatible_group.value}"
        )


@cli.command("convert")
@click.argument("timecode", type=COMPONENTS)
@click.option("--to", "to_rate", type=click.Choice([r.value for r in FrameRate]), default=None, help="Convert to this frame rate.")
@_timecode_options
def convert(timecode, to_rate, rate, limit, base, policy, show_subframes):
    """Show a timecode's frame count, real time, rational and feet+frames forms."""
    rate, limit, base, policy = _settings(rate, limit, base, policy)
    try:
        tc = Timecode.from_components(timecode, rate, limit, base)
        frame_count = tc.frame_count
        click.echo(f"timecode:      {tc.format(show_subframes)}")
        click.echo(f"frames:        {frame_count.whole_frames} (+{frame_count.subframes}/{base})")
        click.echo(f"real time:     {tc.real_time_value:.6f}s")
        click.echo(f"rational:      {tc.rational_value}")
        click.echo(f"feet+frames:   {tc.feet_and_frames}")
        if to_rate:
            converted = tc.converted(FrameRate(to_rate), policy)
            click.echo(f"at {to_rate}: {converted.format(show_subframes)}")
    except TimecodeError as e:
        _fail(e)


@cli.command("from-seconds")
@click.argument("seconds", type=float)
@_timecode_options
def from_seconds(seconds, rate, limit, base, policy, show_subframes):
    """Timecode nearest SECONDS of wall-clock time."""
    rate, limit, base, policy = _settings(rate, limit, base, policy)
    try:
        tc = Timecode.from_real_time(seconds, rate, limit, base, policy)
    except TimecodeError as e:
        _fail(e)
    click.echo(tc.format(show_subframes))


@cli.command("from-rational")
@click.argument("value")
@_timecode_options
def from_rational(value, rate, limit, base, policy, show_subframes):
    """Timecode at VALUE seconds given as N/D (an FCPXML `s` suffix is accepted)."""
    rate, limit, base, policy = _settings(rate, limit, base, policy)
    try:
        fraction = parse_rational_time(value if value.strip().endswith("s") else value.strip() + "s")
        tc = Timecode.from_rational(fraction, rate, limit, base, policy)
    except TimecodeError as e:
        _fail(e)
    click.echo(tc.format(show_subframes))


def _binary(operation, timecode, operand, rate, limit, base, policy, show_subframes):
    rate, limit, base, policy = _settings(rate, limit, base, policy)
    try:
        tc = Timecode.from_components(timecode, rate, limit, base)
        result = getattr(tc, operation)(operand, policy)
    except TimecodeError as e:
        _fail(e)
    logging.debug("%s %s %s -> %r", tc, operation, operand, result)
    click.echo(result.format(show_subframes))


@cli.command("add")
@click.argument("timecode", type=COMPONENTS)
@click.argument("duration", type=COMPONENTS)
@_timecode_options
def add(timecode, duration, rate, limit, base, policy, show_subframes):
    """TIMECODE + DURATION."""
    _binary("add", timecode, duration, rate, limit, base, policy, show_subframes)


@cli.command("subtract")
@click.argument("timecode", type=COMPONENTS)
@click.argument("duration", type=COMPONENTS)
@_timecode_options
def subtract(timecode, duration, rate, limit, base, policy, show_subframes):
    """TIMECODE - DURATION."""
    _binary("subtract", timecode, duration, rate, limit, base, policy, show_subframes)


@cli.command("multiply")
@click.argument("timecode", type=COMPONENTS)
@click.argument("factor", type=float)
@_timecode_options
def multiply(timecode, factor, rate, limit, base, policy, show_subframes):
    """TIMECODE * FACTOR."""
    _binary("multiply", timecode, factor, rate, limit, base, policy, show_subframes)


@cli.command("divide")
@click.argument("timecode", type=COMPONENTS)
@click.argument("divisor", type=float)
@_timecode_options
def divide(timecode, divisor, rate, limit, base, policy, show_subframes):
    """TIMECODE / DIVISOR."""
    _binary("divide", timecode, divisor, rate, limit, base, policy, show_subframes)


@cli.command("offset")
@click.argument("start", type=COMPONENTS)
@click.argument("end", type=COMPONENTS)
@_rate_options
def offset(start, end, rate, limit, base, show_subframes):
    """Signed interval from START to END. Always wraps, so it takes no --policy."""
    rate, limit, base, _ = _settings(rate, limit, base, None)
    try:
        origin = Timecode.from_components(start, rate, limit, base)
        destination = Timecode.from_components(end, rate, limit, base)
        interval = origin.offset(destination)
    except TimecodeError as e:
        _fail(e)
    prefix = "-" if interval.is_negative else ""
    click.echo(f"{prefix}{interval.magnitude.format(show_subframes)}")


if __name__ == "__main__":
    cli()
