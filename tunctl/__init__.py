#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""The app module, containing the command line entrypoint."""

import argparse
import os
import sys
from .tunctl.settings import Config, ProdConfig, DevConfig
from .tunctl.app import TunCtlApplication, SERVICE_ACTIONS, NAMED_ACTIONS, GLOBAL_ACTIONS
from .tunctl.exceptions import TunCtlError, ServiceCommandError
from .tunctl.logger import Logger


def start_application(config: Config, action: str, name: str = None) -> int:
    tunctl = TunCtlApplication(config)

    try:
        if action in SERVICE_ACTIONS:
            return tunctl.control(action, name)
        elif action == 'log':
            return tunctl.log(name)
        elif action == 'print':
            return tunctl.print_command(name)
        elif action == 'connect':
            return tunctl.connect(name)
        elif action == 'test':
            return tunctl.test_connection(name)
        elif action == 'start-all':
            return tunctl.start_all()
        elif action == 'stop-all':
            return tunctl.stop_all()
        elif action == 'list':
            return tunctl.list_active()
        elif action == 'ssh-keygen':
            return tunctl.ssh_keygen()
        elif action == 'unit':
            return tunctl.print_unit()

        raise ValueError('Unsupported action "%s"' % action)

    except ServiceCommandError as e:
        Logger.error(str(e))
        return e.exit_code
    except TunCtlError as e:
        Logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        print('[CTRL] + [C]', file=sys.stderr)
        return 130


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Manages SSH tunnels as system services')
    parser.add_argument(
        '-c',
        '--config',
        help='Path to the tunnels configuration',
        default=os.getenv('TUNCTL_CONFIG', Config.CONFIG_PATH)
    )
    parser.add_argument(
        '-e',
        '--env',
        help='Environment: dev, prod',
        default=os.getenv('TUNCTL_ENV', 'prod')
    )
    parser.add_argument(
        'action',
        choices=NAMED_ACTIONS + GLOBAL_ACTIONS,
        help='Action. Choice: %s' % ', '.join(NAMED_ACTIONS + GLOBAL_ACTIONS)
    )
    parser.add_argument(
        'name',
        nargs='?',
        default=None,
        help='Tunnel name, a [tunnel.<name>] section of the configuration'
    )

    return parser


def main(argv: list = None) -> int:
    #
    # Arguments parsing
    #
    parser = create_parser()
    parsed = parser.parse_args(argv)

    if parsed.action in NAMED_ACTIONS and not parsed.name:
        parser.error('Action "%s" requires a tunnel name' % parsed.action)

    if parsed.action in GLOBAL_ACTIONS and parsed.name:
        parser.error('Action "%s" does not take a tunnel name' % parsed.action)

    config = ProdConfig() if parsed.env == 'prod' else DevConfig()
    config.CONFIG_PATH = parsed.config

    return start_application(config, parsed.action, parsed.name)


if __name__ == '__main__':
    sys.exit(main())
