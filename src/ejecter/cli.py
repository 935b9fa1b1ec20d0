"""
Ejecter CLI - talk to a running ejecter daemon over the session bus.

- list drives that can be ejected
- eject a drive
- tell the daemon a drive is being ejected by another tool
- show whether the eject icon should be visible
- watch lifecycle events
"""

import argparse
import json
import logging
import sys

try:
    import pydbus
    from gi.repository import GLib
    DBUS_AVAILABLE = True
except ImportError:
    DBUS_AVAILABLE = False

from .dbus_api import DBUS_NAME, DBUS_PATH


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def check_dbus_available():
    if not DBUS_AVAILABLE:
        print("Error: DBus support not available. Install pydbus and PyGObject:")
        print("  sudo apt install python3-pydbus python3-gi  # Debian/Ubuntu")
        return False
    return True


def get_dbus_proxy():
    try:
        bus = pydbus.SessionBus()
        return bus.get(DBUS_NAME, DBUS_PATH)
    except Exception as e:
        print(f"Error: Could not connect to ejecter daemon: {e}")
        print("Make sure ejecterd is running in your session")
        return None


def cmd_list_drives(args):
    """List drives with mounted volumes"""
    if not check_dbus_available():
        return 1

    proxy = get_dbus_proxy()
    if not proxy:
        return 1

    drives = proxy.ListDrives()
    if args.json:
        print(json.dumps(drives, indent=2))
        return 0
    if not drives:
        print("No ejectable drives")
        return 0

    for drive in drives:
        volumes = drive.get("volumes", "")
        print(f"{drive.get('identifier', '?'):<12} {drive.get('name', '')} ({volumes})")
    return 0


def cmd_eject(args):
    """Eject a drive"""
    if not check_dbus_available():
        return 1

    proxy = get_dbus_proxy()
    if not proxy:
        return 1

    matches = proxy.Eject(args.device)
    if not matches:
        print(f"No ejectable drive matches {args.device}")
        return 1
    print(f"Eject of {args.device} requested")
    return 0


def cmd_mark_ejecting(args):
    """Tell the daemon another tool is ejecting a drive"""
    if not check_dbus_available():
        return 1

    proxy = get_dbus_proxy()
    if not proxy:
        return 1

    proxy.Command(args.device)
    return 0


def cmd_status(args):
    """Show whether a panel should display the eject icon"""
    if not check_dbus_available():
        return 1

    proxy = get_dbus_proxy()
    if not proxy:
        return 1

    print("icon: visible" if proxy.ShouldShowIcon() else "icon: hidden")
    return 0


def cmd_monitor_events(args):
    """Monitor lifecycle events"""
    if not check_dbus_available():
        return 1

    proxy = get_dbus_proxy()
    if not proxy:
        return 1

    print("Monitoring drive events (Ctrl+C to stop)...\n")

    def on_event(fields):
        if args.json:
            print(json.dumps(fields), flush=True)
            return
        event = fields.get("EJ_EVENT", "unknown")
        drive = fields.get("DRIVE", "")
        result = fields.get("RESULT", "")
        line = f"{event}: {drive}"
        if result:
            line += f" [{result}]"
        if fields.get("DETAIL"):
            line += f" - {fields['DETAIL']}"
        print(line, flush=True)

    def on_changed():
        if not args.json:
            print("drives changed", flush=True)

    proxy.Event.connect(on_event)
    proxy.Changed.connect(on_changed)
    try:
        GLib.MainLoop().run()
    except KeyboardInterrupt:
        print("\nStopped monitoring")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ejecter-cli',
        description='Ejecter CLI - eject removable drives safely',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ejecter-cli list                 List ejectable drives
  ejecter-cli eject /dev/sdb       Eject a drive
  ejecter-cli ejecting /dev/sdb1   Announce an eject done by another tool
  ejecter-cli status               Show whether the eject icon is shown
  ejecter-cli monitor              Watch drive events
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    list_parser = subparsers.add_parser('list', help='List ejectable drives')
    list_parser.add_argument('-j', '--json', action='store_true',
                             help='Output in JSON format')
    list_parser.set_defaults(func=cmd_list_drives)

    eject_parser = subparsers.add_parser('eject', help='Eject a drive')
    eject_parser.add_argument('device', help='Device path (e.g., /dev/sdb)')
    eject_parser.set_defaults(func=cmd_eject)

    mark_parser = subparsers.add_parser('ejecting', help='Mark a drive as being ejected by another tool')
    mark_parser.add_argument('device', help='Device path (e.g., /dev/sdb or /dev/sdb1)')
    mark_parser.set_defaults(func=cmd_mark_ejecting)

    status_parser = subparsers.add_parser('status', help='Show eject icon visibility')
    status_parser.set_defaults(func=cmd_status)

    monitor_parser = subparsers.add_parser('monitor', help='Monitor drive events')
    monitor_parser.add_argument('-j', '--json', action='store_true',
                                help='Output events in JSON format')
    monitor_parser.set_defaults(func=cmd_monitor_events)

    return parser


def main(argv=None):
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        logging.error(f"Error: {e}", exc_info=args.verbose)
        return 1


if __name__ == '__main__':
    sys.exit(main())
