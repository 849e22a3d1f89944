# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Runtime files and folders."""


# standard libs
import os

# external libs
from cmdkit.config import Namespace

# public interface
__all__ = ['cwd', 'home', 'root', 'site', 'path', 'default_path', ]


cwd = os.getcwd()
home = os.path.expanduser('~')
root = hasattr(os, 'getuid') and os.getuid() == 0
site = 'system' if root else 'user'
path = Namespace({
    'system': {
        'log': '/var/log/b64stream',
        'config': '/etc/b64stream.toml'},
    'user': {
        'log': f'{home}/.b64stream/log',
        'config': f'{home}/.b64stream/config.toml'},
    'local': {
        'log': f'{cwd}/.b64stream/log',
        'config': f'{cwd}/.b64stream/config.toml'},
})


# Site directories are only created when something is written there
default_path = path.system if root else path.user
