"""Facts about the runtime environment and opening the local browser."""

from __future__ import annotations

import os
import subprocess
import sys

DOCKER_ENV_FILE = "/.dockerenv"
CONFIG_FILE_PATH_ENV = "DDNS_CONFIG_FILE_PATH"
CONFIG_FILE_NAME = ".ddns_go_config.yaml"
_TERMUX_PREFIX = "/data/data/com.termux/files/usr"


def is_termux() -> bool:
    """Whether the process runs inside Termux."""
    return os.environ.get("PREFIX") == _TERMUX_PREFIX


def is_run_in_docker() -> bool:
    """Whether the process runs inside a Docker container."""
    try:
        os.stat(DOCKER_ENV_FILE)
    except OSError:
        return False
    return True


def get_config_file_path() -> str:
    """The configuration file path, from the environment or the default."""
    return os.environ.get(CONFIG_FILE_PATH_ENV) or get_config_file_path_default()


def get_config_file_path_default() -> str:
    """The configuration file in the user's home directory."""
    home_var = "USERPROFILE" if sys.platform == "win32" else "HOME"
    home = os.environ.get(home_var, "")
    if not home:
        return "../" + CONFIG_FILE_NAME
    return home + os.sep + CONFIG_FILE_NAME


def open_explorer(url: str) -> bool:
    """Try to open the URL in the local browser; return whether it was launched."""
    if sys.platform == "win32":
        command = ["rundll32", "url.dll,FileProtocolHandler", url]
    elif sys.platform == "darwin":
        command = ["open", url]
    else:
        # Starting a process under Termux may be killed with SIGSYS.
        if is_termux():
            return False
        command = ["xdg-open", url]

    try:
        subprocess.Popen(command)
    except OSError:
        print(f"Please open a browser and visit {url} to finish the configuration")
        return False
    print("Success to open the browser, please configure in the web page")
    return True