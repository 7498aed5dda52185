"""
CLI entry point, a thin dispatcher only.

Parse args -> call service -> print report.
"""

import argparse
import sys

from plugin_bridge.utils import Colors, parse_csv


def main():
    try:
        _main()
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Cancelled.{Colors.ENDC}")
        sys.exit(130)


def _add_conversion_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--to", default="opencode", help="Target format")
    p.add_argument("--output", "-o", default=None, help="Output directory (project root)")
    p.add_argument("--also", default="", help="Comma-separated extra targets to generate")
    p.add_argument("--permissions", default="broad", help="Permission mapping: none | broad | from-commands")
    p.add_argument("--agent-mode", default="subagent", help="Default agent mode: primary | subagent")
    p.add_argument(
        "--no-infer-temperature",
        dest="infer_temperature",
        action="store_false",
        help="Do not infer agent temperature from name/description",
    )
    p.add_argument("--interactive", "-i", action="store_true", help="Pick targets interactively")


def _main():
    # Import targets so they register themselves
    from plugin_bridge import targets  # noqa: F401
    from plugin_bridge.core.target import target_registry

    parser = argparse.ArgumentParser(
        description="Plugin Bridge - convert Claude plugins for other AI coding assistants"
    )
    sub = parser.add_subparsers(dest="command", help="Command")

    # --- convert ---
    p_convert = sub.add_parser("convert", help="Convert a Claude plugin into another format")
    p_convert.add_argument("source", help="Path to the Claude plugin directory")
    _add_conversion_args(p_convert)

    # --- install ---
    p_install = sub.add_parser("install", help="Install and convert a Claude plugin")
    p_install.add_argument("plugin", help="Plugin name or path")
    _add_conversion_args(p_install)

    # --- list ---
    sub.add_parser("list", help="List supported target formats")

    args = parser.parse_args()

    if args.command in ("convert", "install"):
        code = _handle_conversion(args, target_registry)
        if code:
            sys.exit(code)
    elif args.command == "list":
        _handle_list(target_registry)
    else:
        parser.print_help()


def _handle_conversion(args, registry) -> int:
    from plugin_bridge.config import Settings
    from plugin_bridge.core.types import ConvertOptions
    from plugin_bridge.services.convert_service import run_convert, run_install

    target_name = args.to
    extras = parse_csv(args.also)
    if args.interactive:
        from plugin_bridge.tui import select_targets

        selected = select_targets(registry, default=target_name)
        if not selected:
            return 1
        target_name, extras = selected[0], selected[1:]

    options = ConvertOptions(
        agent_mode=args.agent_mode,
        infer_temperature=args.infer_temperature,
        permissions=args.permissions,
    )
    settings = Settings.from_environment()

    try:
        if args.command == "convert":
            report = run_convert(args.source, target_name, settings, args.output, extras, options)
        else:
            report = run_install(args.plugin, target_name, settings, args.output, extras, options)
    except (ValueError, OSError, RuntimeError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1

    for outcome in report.outcomes:
        for advisory in outcome.advisories:
            color = Colors.YELLOW if advisory.is_warning else Colors.BLUE
            print(f"{color}{advisory.message}{Colors.ENDC}")
        if args.command == "convert":
            print(f"{Colors.GREEN}Converted {report.plugin_name} to {outcome.target} at {outcome.root}{Colors.ENDC}")
        else:
            print(f"{Colors.GREEN}Installed {report.plugin_name} to {outcome.root}{Colors.ENDC}")

    for name in report.skipped:
        print(f"{Colors.YELLOW}Skipping unknown target: {name}{Colors.ENDC}")
    return 0


def _handle_list(registry):
    print(f"{Colors.BLUE}Supported target formats:{Colors.ENDC}")
    for target in registry.all():
        layout = target.layout
        print(f"  - {target.name}: {target.display_name} ({layout.dot_dir}/, {layout.config_filename})")


if __name__ == "__main__":
    main()
