"""WCAG contrast checking and accessible color suggestions."""

import sys

import click

from ..color import WcagLevel, evaluate_contrast, format_hex, suggest_accessible_color
from .utils import pass_fail

_LEVEL_LABELS = {
    WcagLevel.AA_LARGE: "AA large (3 : 1)",
    WcagLevel.AA: "AA normal (4.5 : 1)",
    WcagLevel.AAA: "AAA normal (7 : 1)",
    WcagLevel.A_PLUS: "A+ (12.5 : 1)",
}


@click.command()
@click.argument("foreground")
@click.argument("background")
def contrast(foreground: str, background: str) -> None:
    """Show the WCAG contrast ratio of FOREGROUND text on BACKGROUND.

    Both colors are 3- or 6-digit hex values, with or without '#'.
    """
    report = evaluate_contrast(format_hex(foreground), format_hex(background))
    if report is None:
        click.echo("❌ Enter valid colors (3- or 6-digit hex)", err=True)
        sys.exit(1)

    click.echo(f"Contrast ratio: {report.format_ratio()}")
    for level, label in _LEVEL_LABELS.items():
        click.echo(f"   • {label}: {pass_fail(report.passes_level(level))}")


@click.command()
@click.argument("foreground")
@click.argument("background")
@click.option(
    "--target",
    type=click.Choice([level.value for level in WcagLevel]),
    default=WcagLevel.AA.value,
    help="Contrast target to reach (default: aa)",
)
def suggest(foreground: str, background: str, target: str) -> None:
    """Suggest a FOREGROUND color that meets TARGET on BACKGROUND."""
    foreground = format_hex(foreground)
    background = format_hex(background)
    level = WcagLevel(target)

    report = evaluate_contrast(foreground, background)
    if report is None:
        click.echo("❌ Enter valid colors (3- or 6-digit hex)", err=True)
        sys.exit(1)

    if report.passes_level(level):
        click.echo(f"✅ {foreground} already meets {_LEVEL_LABELS[level]} on {background}")
        return

    suggestion = suggest_accessible_color(foreground, background, level.ratio)
    if suggestion is None:
        click.echo(f"⚠️  No mix of {foreground} reaches {_LEVEL_LABELS[level]} on {background}")
        sys.exit(1)

    click.echo(f"💡 Suggested color: {suggestion}")
