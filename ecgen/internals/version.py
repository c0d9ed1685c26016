from __future__ import annotations
import sys, platform

from ecgen import __version__ as app_ver, __dev__ as is_dev

def _get_versions() -> dict[str, str]:
    try:
        import lark
        lark_ver = getattr(lark, "__version__", "unknown")
    except ImportError:
        lark_ver = "unknown"

    return {
        "app": app_ver,
        "python": platform.python_version(),
        "lark": lark_ver,
    }

def banner() -> str:
    v = _get_versions()
    dev_marker = " (dev)" if is_dev else ""
    return f"ecgen {v['app']}{dev_marker} • Python {v['python']} • lark {v['lark']}"

def print_banner(stream=None) -> None:
    stream = stream or sys.stdout
    # Only style interactive terminals; piped output stays plain
    if getattr(stream, "isatty", lambda: False)():
        BOLD, RESET = "\x1b[1m", "\x1b[0m"
    else:
        BOLD, RESET = "", ""
    print(f"{BOLD}{banner()}{RESET}", file=stream)
