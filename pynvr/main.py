#!/usr/bin/env python
#

import logging
import sys

import click

from . import PyNvr
from .constant import RESOURCE_KINDS

logging.basicConfig(level=logging.ERROR,
                    format='%(asctime)s:%(name)s:%(levelname)s: %(message)s')
_LOGGER = logging.getLogger('pynvr')

opts = {
    "username": None,
    "password": None,
    "host": None,
    "scheme": "cookie",

    "storage-dir": "./",
    "verbose": 0,
}

# PyNvr instance...
_nvr = None


def _info(args):
    _LOGGER.info("{}".format(args))


def _fatal(args):
    sys.exit("FATAL-ERROR:{}".format(args))


def _print_toasts():
    if _nvr is not None:
        for toast in _nvr.toasts.items:
            print("{}: {}".format(toast.severity, toast.message))


def connect(need_login=True):
    _info("connecting")
    global _nvr
    kwargs = {
        "storage_dir": opts["storage-dir"],
        "auth_scheme": opts["scheme"],
        "verbose_debug": opts["verbose"] > 2,
    }
    if opts["host"] is not None:
        kwargs["host"] = opts["host"]
    _nvr = PyNvr(**kwargs)
    if need_login and not _nvr.is_authenticated:
        if opts["username"] is None or opts["password"] is None:
            _fatal("not logged in, please supply a username and password")
        error = _nvr.login(opts["username"], opts["password"])
        if error is not None:
            _fatal("unable to login: {}".format(error))
    return _nvr


def list_items(name, items):
    print("{}:".format(name))
    for item in items:
        print(" {};id={}".format(item.name, item.id))


@click.group()
@click.option('-u', '--username', required=False,
              help="NVR username")
@click.option('-p', '--password', required=False,
              help="NVR password")
@click.option('-H', '--host', required=False,
              help="NVR server url")
@click.option('-S', '--scheme', default='cookie', show_default=True,
              type=click.Choice(['cookie', 'bearer'], case_sensitive=False),
              help="How the session is carried")
@click.option('-s', '--storage-dir',
              default="./", show_default='current dir',
              help="Where to store session state")
@click.option("-v", "--verbose", count=True,
              help="Be chatty. More is more chatty!")
def cli(username, password, host, scheme, storage_dir, verbose):
    if username is not None:
        opts['username'] = username
    if password is not None:
        opts['password'] = password
    if host is not None:
        opts['host'] = host
    if scheme is not None:
        opts['scheme'] = scheme.lower()
    if storage_dir is not None:
        opts['storage-dir'] = storage_dir
    if verbose is not None:
        opts['verbose'] = verbose
        if verbose == 0:
            _LOGGER.setLevel(logging.ERROR)
        if verbose == 1:
            _LOGGER.setLevel(logging.INFO)
        if verbose > 1:
            _LOGGER.setLevel(logging.DEBUG)


@cli.result_callback()
def finish(*_args, **_kwargs):
    if _nvr is not None:
        _nvr.stop()


@cli.command()
def login():
    nvr = connect()
    print("logged in" if nvr.is_authenticated else "not logged in")


@cli.command()
def logout():
    nvr = connect(need_login=False)
    nvr.logout()
    print("logged out")


@cli.command(name='list')
@click.argument('item', type=click.Choice(['all'] + RESOURCE_KINDS, case_sensitive=False))
def list_cmd(item):
    nvr = connect()
    for kind in RESOURCE_KINDS:
        if item == "all" or item == kind:
            getattr(nvr.store, "load_" + kind)()
            list_items(kind, getattr(nvr.store, kind))
    _print_toasts()


@cli.command()
def status():
    nvr = connect()
    nvr.store.load_cameras()
    nvr.store.load_status()
    for camera in nvr.store.cameras:
        print(" {};id={};status={}".format(camera.name, camera.id, nvr.store.status_of(camera.id)))
    _print_toasts()


@cli.command()
def notifications():
    nvr = connect()
    nvr.store.load_notifications()
    print("unread={}".format(nvr.store.unread_count))
    for notification in nvr.store.notifications:
        print(" [{}] {}: {}{}".format(notification.severity, notification.title, notification.message,
                                      "" if notification.read else " (new)"))


@cli.command()
def sync():
    nvr = connect()
    nvr.store.sync_cameras()
    _print_toasts()


@cli.command()
@click.argument('action', type=click.Choice(['start', 'stop'], case_sensitive=False))
@click.argument('mosaic_id', type=int)
def mosaic(action, mosaic_id):
    nvr = connect()
    if action == 'start':
        nvr.store.start_mosaic(mosaic_id)
    else:
        nvr.store.stop_mosaic(mosaic_id)
    _print_toasts()


def main_func():
    cli()


if __name__ == '__main__':
    cli()
