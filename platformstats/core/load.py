"""CPU load calculation from two /proc/stat samples."""

from .errors import InvalidState
from .models import CpuStat


def calculate_load(prev: CpuStat, curr: CpuStat) -> float:
    """
    Compute CPU utilization between two samples of the same CPU.

    The result keeps the historical rounding: a +1 bias on the
    per-mille value, then scaled down by 10. ``curr`` must be taken
    after ``prev``.

    Raises:
        InvalidState: if no time elapsed between the samples.
    """
    idle_prev = prev.idle + prev.iowait
    idle_curr = curr.idle + curr.iowait

    nidle_prev = prev.user + prev.nice + prev.system + prev.irq + prev.softirq
    nidle_curr = curr.user + curr.nice + curr.system + curr.irq + curr.softirq

    total_prev = idle_prev + nidle_prev
    total_curr = idle_curr + nidle_curr

    total_delta = float(total_curr) - float(total_prev)
    idle_delta = float(idle_curr) - float(idle_prev)

    if total_delta == 0:
        raise InvalidState(
            f"CPU{curr.cpu_id}: no jiffies elapsed between samples, load is undefined"
        )

    return (1000 * (total_delta - idle_delta) / total_delta + 1) / 10
