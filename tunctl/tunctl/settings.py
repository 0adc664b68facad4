# -*- coding: utf-8 -*-
"""Application configuration."""
import os


class Config(object):
    """Base configuration."""

    APP_DIR = os.path.abspath(os.path.dirname(__file__))  # This directory
    PROJECT_ROOT = os.path.abspath(os.path.join(APP_DIR, os.pardir))
    CONFIG_PATH = os.getenv('TUNCTL_CONFIG', '/etc/tunctl/tunctl.conf')
    SERVICE_PREFIX = os.getenv('TUNCTL_SERVICE_PREFIX', 'tunctl')
    SYSTEMCTL = 'systemctl'
    JOURNALCTL = 'journalctl'
    LOG_LINES = 50
    PRIVILEGE_SWITCH = ['su', '-s', '/bin/sh', '-c']
    LOG_LEVEL = 'info'
    LOG_PATH = os.getenv('TUNCTL_LOG_PATH', '')


class ProdConfig(Config):
    """Production configuration."""

    ENV = 'prod'
    DEBUG = False


class DevConfig(Config):
    """Development configuration."""

    ENV = 'dev'
    DEBUG = True
    LOG_LEVEL = 'debug'
