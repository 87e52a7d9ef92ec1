#!/usr/bin/env python3
"""
kill_port.py
--------------
Free local TCP ports for development by stopping whatever listens on them.

Usage:
    python scripts/kill_port.py            # dev ports 4000 3000 3001 3002
    python scripts/kill_port.py 8000 8001
"""

from __future__ import annotations

import argparse
import os
import signal
import subprocess
from typing import Iterable, Set

DEV_PORTS = (4000, 3000, 3001, 3002)


def _run(cmd: list[str]) -> str:
    try:
        return subprocess.check_output(cmd, text=True, stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        # Tool missing, or nothing listening (lsof exits 1)
        return ""


def parse_netstat(raw: str, port: int) -> Set[int]:
    """Extract listening PIDs for `port` from `netstat -ano` (Windows) or `netstat -anp` output."""
    target = f":{port}"
    pids: Set[int] = set()
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.lower().startswith("proto"):
            continue
        parts = line.split()
        if len(parts) < 4:
            continue
        proto = parts[0].lower()
        if proto not in {"tcp", "tcp6"}:
            continue
        if os.name == "nt" or parts[1].endswith(target):
            local_addr, state = parts[1], parts[3]
        else:
            # Linux: Proto Recv-Q Send-Q Local Foreign State PID/Program
            if len(parts) < 7:
                continue
            local_addr, state = parts[3], parts[5]
        if state.upper() not in {"LISTENING", "LISTEN"}:
            continue
        if not local_addr.endswith(target):
            continue
        pid_field = parts[-1].split("/", 1)[0]
        try:
            pids.add(int(pid_field))
        except ValueError:
            continue
    return pids


def parse_lsof(raw: str) -> Set[int]:
    pids: Set[int] = set()
    for line in raw.splitlines():
        try:
            pids.add(int(line.strip()))
        except ValueError:
            continue
    return pids


def find_pids(port: int) -> Set[int]:
    """Combine lsof and netstat to find processes listening on the port."""
    pids: Set[int] = set()
    if os.name != "nt":
        pids.update(parse_lsof(_run(["lsof", "-nP", f"-iTCP:{port}", "-sTCP:LISTEN", "-t"])))
    netstat_cmd = ["netstat", "-ano"] if os.name == "nt" else ["netstat", "-anp", "tcp"]
    pids.update(parse_netstat(_run(netstat_cmd), port))
    pids.discard(os.getpid())
    return pids


def kill_pids(pids: Iterable[int]) -> list[int]:
    """Send SIGTERM to each PID; returns the PIDs that were signalled."""
    killed: list[int] = []
    for pid in sorted(pids):
        try:
            os.kill(pid, signal.SIGTERM)
        except PermissionError:
            print(f"[WARN] no permission to stop PID {pid}")
        except ProcessLookupError:
            print(f"[INFO] PID {pid} already gone")
        else:
            print(f"[INFO] sent SIGTERM to PID {pid}")
            killed.append(pid)
    return killed


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Stop processes listening on local TCP ports.")
    parser.add_argument("ports", type=int, nargs="*", help=f"ports to free (default: {' '.join(map(str, DEV_PORTS))})")
    args = parser.parse_args(argv)
    ports = args.ports or list(DEV_PORTS)

    for port in ports:
        if port <= 0 or port > 65535:
            parser.error(f"invalid port {port}: use 1-65535.")

    for port in ports:
        pids = find_pids(port)
        if not pids:
            print(f"Port {port}: nothing listening.")
            continue
        print(f"Port {port}: stopping {len(pids)} process(es): {', '.join(map(str, sorted(pids)))}")
        kill_pids(pids)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
