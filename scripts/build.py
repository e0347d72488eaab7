"""Build the generate-xcassets executable. Run after ``pip install -e .[build]``."""
import os
import subprocess
import sys

from generate_xcassets import CONFIG_FILE, DEFAULT_CONFIG, save_config

PACKAGES = {
    'PyInstaller': 'pyinstaller',
}

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DIST_DIR = os.path.join(ROOT, 'dist')


def _module_exists(name: str) -> bool:
    from importlib.util import find_spec
    return find_spec(name) is not None


def ensure_packages() -> None:
    """Install required packages if they are missing."""
    for module, pkg in PACKAGES.items():
        if not _module_exists(module):
            subprocess.check_call([sys.executable, '-m', 'pip', 'install', pkg])


def write_default_config() -> None:
    """Place a default config.ini next to the executable."""
    os.makedirs(DIST_DIR, exist_ok=True)
    path = os.path.join(DIST_DIR, CONFIG_FILE)
    if not os.path.exists(path):
        save_config(DEFAULT_CONFIG, path)


def build_exe() -> None:
    """Build executable using PyInstaller."""
    script = os.path.join(ROOT, 'generate_xcassets.py')
    cmd = [
        sys.executable, '-m', 'PyInstaller',
        '--console',
        '--onefile',
        '--name', 'generate-xcassets',
        '--paths', ROOT,
        '--workpath', os.path.join(ROOT, 'build'),
        '--distpath', DIST_DIR,
        script,
    ]
    subprocess.check_call(cmd)


if __name__ == '__main__':
    ensure_packages()
    build_exe()
    write_default_config()
