#!/usr/bin/env python3

"""
This is a browser tab grouping client. It lists tabs of connected browsers,
groups them by domain and by title keywords, and creates native tab groups.

Browsers are reached through mediators: native messaging hosts started by
the browser extension, each serving HTTP on a local port. Every mediator
gets a one-letter prefix, so tab ids look like "a.<window_id>.<tab_id>".

Grouping runs separately for every window because a native group cannot
span windows.
"""

import sys
from argparse import ArgumentParser
from functools import partial
from string import ascii_lowercase
from typing import List
from typing import Optional
from typing import Tuple

from tabgroup.api import MultipleMediatorsAPI
from tabgroup.api import SingleMediatorAPI
from tabgroup.colors import COLORS
from tabgroup.grouping import TabGroup
from tabgroup.grouping import group_tabs
from tabgroup.inout import edit_lines_in_editor
from tabgroup.inout import get_mediator_ports
from tabgroup.inout import is_port_accepting_connections
from tabgroup.inout import marshal
from tabgroup.inout import read_stdin
from tabgroup.inout import stdout_buffer_write
from tabgroup.mediator.log import tabgroup_logger
from tabgroup.tab import Tab
from tabgroup.tab import iter_window_tabs
from tabgroup.utils import split_tab_ids

EDITOR_HEADER = [
    '# Edit group titles and colors, delete lines to skip groups.',
    '# Format: title<TAB>color<TAB>origin<TAB>tab ids',
    '# Colors: %s (or a hex value such as #1E88E5)' % ', '.join(COLORS),
]


def parse_target_hosts(target_hosts: str) -> Tuple[List[str], List[int]]:
    """
    Input: localhost:2000,127.0.0.1:3000
    Output: (['localhost', '127.0.0.1'], [2000, 3000])
    """
    hosts, ports = [], []
    for pair in target_hosts.split(','):
        try:
            host, port = pair.split(':')
            ports.append(int(port))
        except ValueError:
            raise ValueError('Expected host:port, got "%s"' % pair)
        hosts.append(host)
    return hosts, ports


def create_clients(target_hosts=None) -> List[SingleMediatorAPI]:
    if target_hosts is None:
        ports = list(get_mediator_ports())
        hosts = ['localhost'] * len(ports)
    else:
        hosts, ports = parse_target_hosts(target_hosts)

    result = [SingleMediatorAPI(prefix, host=host, port=port)
              for prefix, host, port in zip(ascii_lowercase, hosts, ports)
              if is_port_accepting_connections(port, host)]
    tabgroup_logger.info('Created clients: %s', result)
    return result


def plan_groups(tabs: List[Tab], window: Optional[str] = None) -> List[TabGroup]:
    groups = []
    for window_key, window_tabs in iter_window_tabs(tabs):
        if window is not None and window_key != window:
            continue
        groups.extend(group_tabs(window_tabs))
    return groups


def parse_group_lines(lines: List[str], tabs: List[Tab]) -> List[TabGroup]:
    tabs_by_id = {tab.id: tab for tab in tabs}
    groups = [TabGroup.from_line(line, tabs_by_id)
              for line in lines
              if line.strip() and not line.startswith('#')]
    seen = set()
    for group in groups:
        if not group.tabs:
            raise ValueError('Group "%s" has no tabs' % group.title)
        windows = sorted({tab.window for tab in group.tabs})
        if len(windows) > 1:
            raise ValueError('Group "%s" spans several windows: %s' % (group.title, windows))
        duplicates = seen.intersection(group.tab_ids)
        if duplicates:
            raise ValueError('Tabs %s appear in more than one group' % sorted(duplicates))
        seen.update(group.tab_ids)
    return groups


def edit_groups(groups: List[TabGroup], tabs: List[Tab]) -> Optional[List[TabGroup]]:
    lines = edit_lines_in_editor(EDITOR_HEADER + [group.line for group in groups])
    if lines is None:
        return None
    return parse_group_lines(lines, tabs)


def list_tabs(args):
    tabgroup_logger.info('Listing tabs')
    api = MultipleMediatorsAPI(create_clients(args.target_hosts))
    tabs = api.list_tabs([])
    stdout_buffer_write(marshal(tabs))


def group_tabs_command(args):
    tabgroup_logger.info('Grouping tabs: window=%s dry_run=%s edit=%s',
                         args.window, args.dry_run, args.edit)
    api = MultipleMediatorsAPI(create_clients(args.target_hosts))
    tabs = api.list_tab_records()
    groups = plan_groups(tabs, args.window)

    if args.edit:
        try:
            groups = edit_groups(groups, tabs)
        except ValueError as e:
            print('Cannot parse edited groups: %s' % e, file=sys.stderr)
            return 1
        if groups is None:
            print('Editor exited with an error, no groups created', file=sys.stderr)
            return 1
    if args.expanded:
        groups = [group.edited(collapsed=False) for group in groups]

    if groups:
        stdout_buffer_write(marshal([group.line for group in groups]))
    if args.dry_run:
        return 0

    for group in groups:
        group_id = api.group_tabs(group)
        tabgroup_logger.info('Created group %s: %s', group_id, group)
    return 0


def ungroup_tabs(args):
    # Try stdin if arguments are empty
    tab_ids = args.tab_ids
    if len(args.tab_ids) == 0:
        tab_ids = split_tab_ids(read_stdin(timeout=0.05).strip())

    api = MultipleMediatorsAPI(create_clients(args.target_hosts))
    if len(tab_ids) == 0:
        tab_ids = [tab.id for tab in api.list_tab_records()]

    tabgroup_logger.info('Ungrouping tabs: %s', tab_ids)
    api.ungroup_tabs(tab_ids)


def show_groups(args):
    tabgroup_logger.info('Showing groups')
    api = MultipleMediatorsAPI(create_clients(args.target_hosts))
    groups = api.list_groups()
    if groups:
        stdout_buffer_write(marshal(groups))


def _print_available_windows(tabs: List[Tab]):
    for window, window_tabs in iter_window_tabs(tabs):
        print('%s\t%s' % (window, len(window_tabs)))


def show_windows(args):
    tabgroup_logger.info('Showing windows')
    api = MultipleMediatorsAPI(create_clients(args.target_hosts))
    _print_available_windows(api.list_tab_records())


def show_clients(args):
    tabgroup_logger.info('Showing clients')
    for client in create_clients(args.target_hosts):
        print(client)


def no_command(parser, args):
    print('No command has been specified')
    parser.print_help()
    return 1


def parse_args(args):
    parser = ArgumentParser(
        description='''
        tg (tabgroup) groups your browser tabs into native tab groups: tabs
        from the same site first, then tabs whose titles share keywords.
        ''')

    parser.add_argument('--target', dest='target_hosts', default=None,
                        help='Target hosts IP:Port')

    subparsers = parser.add_subparsers()
    parser.set_defaults(func=partial(no_command, parser))

    parser_list_tabs = subparsers.add_parser(
        'list',
        help='''
        list available tabs in the following format:
        "<prefix>.<window_id>.<tab_id><Tab>Page title<Tab>URL"
        ''')
    parser_list_tabs.set_defaults(func=list_tabs)

    parser_group_tabs = subparsers.add_parser(
        'group',
        help='''
        group tabs of every window by domain and by title keywords, print
        the groups as "title<Tab>color<Tab>origin<Tab>tab ids" and create them
        in the browser
        ''')
    parser_group_tabs.set_defaults(func=group_tabs_command)
    parser_group_tabs.add_argument('--dry-run', action='store_true', default=False,
                                   help='only print the groups, do not create them')
    parser_group_tabs.add_argument('--edit', action='store_true', default=False,
                                   help='edit group titles and colors in $EDITOR before creating')
    parser_group_tabs.add_argument('--expanded', action='store_true', default=False,
                                   help='create groups expanded (default: collapsed)')
    parser_group_tabs.add_argument('--window', type=str, default=None,
                                   help='only group tabs of this window, e.g. a.20')

    parser_ungroup_tabs = subparsers.add_parser(
        'ungroup',
        help='''
        remove specified tab IDs from their groups. Tab IDs are taken from
        arguments or stdin; when none are given, all tabs are ungrouped
        ''')
    parser_ungroup_tabs.set_defaults(func=ungroup_tabs)
    parser_ungroup_tabs.add_argument('tab_ids', type=str, nargs='*',
                                     help='Tab IDs to ungroup')

    parser_show_groups = subparsers.add_parser(
        'groups',
        help='''
        display existing native tab groups in the following format:
        "<prefix>.<group_id><Tab><window_id><Tab>title<Tab>color<Tab>collapsed"
        ''')
    parser_show_groups.set_defaults(func=show_groups)

    parser_show_windows = subparsers.add_parser(
        'windows',
        help='''
        display available prefixes and window IDs, along with the number of
        tabs in every window
        ''')
    parser_show_windows.set_defaults(func=show_windows)

    parser_show_clients = subparsers.add_parser(
        'clients',
        help='''
        display available browser clients (mediators), their prefixes and
        address (host:port), native app PIDs, and browser names
        ''')
    parser_show_clients.set_defaults(func=show_clients)

    return parser.parse_args(args)


def run_commands(args):
    args = parse_args(args)
    result = 0
    try:
        result = args.func(args)
    except BrokenPipeError:
        pass
    return result


def main():
    sys.exit(run_commands(sys.argv[1:]))


if __name__ == '__main__':
    main()
