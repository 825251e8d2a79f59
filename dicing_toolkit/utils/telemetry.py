import time
import functools
import logging
import psutil
import os
import streamlit as st
from typing import Optional, Any, Callable, List, Dict
from datetime import datetime

logger = logging.getLogger("PerformanceMonitor")

class PerformanceMonitor:
    """
    Timing log for the heavier dashboard actions (wafer map upload,
    CSV and Excel export), newest first.
    Kept in session state so the Tests tab can show it.
    """
    SESSION_KEY = "performance_metrics_log"
    MAX_ENTRIES = 50

    @staticmethod
    def get_logs() -> List[Dict[str, Any]]:
        if PerformanceMonitor.SESSION_KEY not in st.session_state:
            st.session_state[PerformanceMonitor.SESSION_KEY] = []
        return st.session_state[PerformanceMonitor.SESSION_KEY]

    @staticmethod
    def log_event(action: str, duration_sec: float, memory_delta_mb: float = 0.0, details: str = ""):
        entry = {
            "Timestamp": datetime.now().strftime("%H:%M:%S"),
            "Action": action,
            "Duration (s)": round(duration_sec, 4),
            "Memory Delta (MB)": round(memory_delta_mb, 2),
            "Details": details
        }

        logs = PerformanceMonitor.get_logs()
        logs.insert(0, entry)
        if len(logs) > PerformanceMonitor.MAX_ENTRIES:
            logs.pop()

        logger.info(f"PERF | {action} | {duration_sec:.4f}s | {memory_delta_mb:+.2f}MB | {details}")

    @staticmethod
    def clear_logs():
        st.session_state[PerformanceMonitor.SESSION_KEY] = []

def get_process_memory_mb() -> float:
    """Resident memory of this process in MB."""
    return psutil.Process(os.getpid()).memory_info().rss / 1024 / 1024

def describe_size(result: Any) -> str:
    """Details for export actions: size of the produced text or workbook."""
    if isinstance(result, bytes):
        return f"{len(result) / 1024:.1f} KB workbook"
    if isinstance(result, str):
        return f"{len(result.splitlines())} CSV lines"
    return ""

def track_performance(action: Optional[str] = None, describe: Optional[Callable[[Any], str]] = None):
    """
    Decorator timing a dashboard action and logging it to PerformanceMonitor.

    `describe` turns the return value into the Details column, e.g. the
    number of dies read from a map. A raised exception is logged with its
    type and re-raised.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            name = action or func.__name__
            start_time = time.perf_counter()
            start_mem = get_process_memory_mb()
            details = ""

            try:
                result = func(*args, **kwargs)
                if describe is not None:
                    details = describe(result)
                return result
            except Exception as e:
                details = f"failed: {type(e).__name__}"
                raise
            finally:
                duration = time.perf_counter() - start_time
                mem_delta = get_process_memory_mb() - start_mem
                PerformanceMonitor.log_event(name, duration, mem_delta, details)

        return wrapper
    return decorator
