import psutil, socket, time
from datetime import datetime

CPU_INTERVAL = 1.0  # seconds, blocking
DISK_PATH = "/"


class CollectorError(Exception):
    """A metric subsystem (cpu, memory, disk, network, load, host) could not be read."""

    def __init__(self, subsystem, cause):
        super().__init__(f"{subsystem}: {cause}")
        self.subsystem = subsystem


def truncate(value, places):
    # int() drops the tail, so 12.39 -> 12.3 at one place
    factor = 10 ** places
    return int(value * factor) / factor


def format_uptime(seconds):
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60
    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _hostname():
    try:
        return socket.gethostname()
    except OSError:
        return "unknown"


def _read(subsystem, fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except Exception as exc:
        raise CollectorError(subsystem, exc) from exc


def snapshot():
    host = _hostname()
    cpu = _read("cpu", psutil.cpu_percent, interval=CPU_INTERVAL, percpu=False)
    vm = _read("memory", psutil.virtual_memory)
    du = _read("disk", psutil.disk_usage, DISK_PATH)
    net = _read("network", psutil.net_io_counters, pernic=False)
    load = _read("load", psutil.getloadavg)
    boot = _read("host", psutil.boot_time)

    sent, recv = (net.bytes_sent, net.bytes_recv) if net is not None else (0, 0)
    return {
        "hostname": host,
        "cpu_percent": truncate(cpu, 1),
        "memory": {"total": vm.total, "used": vm.used,
                   "percent": truncate(vm.percent, 1)},
        "disk": {"total": du.total, "used": du.used,
                 "percent": truncate(du.percent, 1)},
        "network": {"bytes_sent": sent, "bytes_recv": recv},
        "load": {"1min": truncate(load[0], 2),
                 "5min": truncate(load[1], 2),
                 "15min": truncate(load[2], 2)},
        "uptime": format_uptime(max(0, time.time() - boot)),
        "timestamp": datetime.now().astimezone().isoformat(),
    }
