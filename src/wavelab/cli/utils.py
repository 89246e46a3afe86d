"""Shared utilities for CLI commands."""

import sys
from pathlib import Path

import click


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def display_common_header(title: str) -> None:
    """Display a common header for CLI commands."""
    click.echo(f"🌊 {title}", err=True)


def display_path_info(label: str, path: Path, emoji: str = "📁") -> None:
    """Display path information with consistent formatting."""
    click.echo(f"{emoji} {label}: {path}")


def pass_fail(passed: bool) -> str:
    return "✅ Pass" if passed else "❌ Fail"
