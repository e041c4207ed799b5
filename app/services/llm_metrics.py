"""
LLM Metrics Logger - latency and outcome tracking for completion calls.

Logs a structured JSON line for every upstream call with timing and size metrics.
"""

import json
import time
import asyncio
from typing import Optional, Dict, Any
from pathlib import Path
import logging

# Separate log file for LLM metrics only
LOGS_DIR = Path(__file__).parent.parent.parent / "logs"
LOGS_DIR.mkdir(exist_ok=True)
LLM_METRICS_LOG = LOGS_DIR / "llm_metrics.jsonl"

# Keep the in-memory history bounded
MAX_RECORDED_CALLS = 500

_inflight_calls: int = 0
_inflight_lock = asyncio.Lock()
_call_metrics: list[Dict[str, Any]] = []


def reset_metrics():
    """Drop collected call metrics."""
    global _call_metrics
    _call_metrics = []


def get_call_metrics() -> list[Dict[str, Any]]:
    """Get all collected call metrics."""
    return _call_metrics.copy()


class LLMCallLogger:
    """
    Context manager for logging a single completion call.

    Usage:
        async with LLMCallLogger(
            model="gpt-4.1-mini",
            prompt_chars=1234,
            caller_context="chat_gateway.ask",
        ) as call:
            call.mark_send()
            text = await make_call()
            call.set_output(text)
    """

    def __init__(
        self,
        model: str,
        prompt_chars: int,
        caller_context: str = "unknown",
    ):
        self.model = model
        self.prompt_chars = prompt_chars
        self.caller_context = caller_context

        # Timing (monotonic clock)
        self.t_start: Optional[float] = None
        self.t_send: Optional[float] = None
        self.t_done: Optional[float] = None

        self.inflight_at_start: int = 0

        # Output
        self.output_chars: int = 0
        self.status: str = "pending"
        self.error_code: Optional[str] = None

    async def __aenter__(self):
        """Start timing and track concurrency."""
        global _inflight_calls

        self.t_start = time.monotonic()
        async with _inflight_lock:
            self.inflight_at_start = _inflight_calls
            _inflight_calls += 1
        return self

    def mark_send(self):
        """Mark when HTTP request is sent."""
        self.t_send = time.monotonic()

    def set_output(self, response_text: str, status: str = "success"):
        """Set output and status."""
        self.output_chars = len(response_text)
        self.status = status

    def set_error(self, error_code: str):
        """Mark call as failed."""
        self.status = "error"
        self.error_code = error_code

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Record metrics and decrement inflight counter."""
        global _inflight_calls

        self.t_done = time.monotonic()

        async with _inflight_lock:
            _inflight_calls -= 1

        if exc_type is not None:
            self.status = "error"
            self.error_code = self.error_code or exc_type.__name__

        latency_total_ms = (self.t_done - self.t_start) * 1000 if self.t_start else 0
        latency_network_ms = (self.t_done - self.t_send) * 1000 if self.t_send else 0

        log_entry = {
            "timestamp_ms": int(time.time() * 1000),
            "latency_total_ms": round(latency_total_ms, 2),
            "latency_network_ms": round(latency_network_ms, 2),
            "inflight_at_start": self.inflight_at_start,
            "prompt_chars": self.prompt_chars,
            "prompt_tokens_est": self.prompt_chars // 4,
            "output_tokens_est": self.output_chars // 4,
            "model": self.model,
            "caller_context": self.caller_context,
            "status": self.status,
            "error_code": self.error_code,
        }

        _call_metrics.append(log_entry)
        del _call_metrics[:-MAX_RECORDED_CALLS]

        try:
            with open(LLM_METRICS_LOG, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry) + "\n")
        except OSError as e:
            # Never fail a request on metrics logging
            logging.getLogger("llm_metrics").warning(f"Failed to write metrics: {e}")

        return False  # Don't suppress exceptions


def get_model_latency_stats() -> Dict[str, Dict[str, Any]]:
    """
    Get latency stats by model for the current process.

    Returns dict of model -> {avg_latency_ms, p95_latency_ms, call_count, error_count, ...}
    """
    metrics = get_call_metrics()

    model_latencies: Dict[str, list[float]] = {}
    model_errors: Dict[str, int] = {}
    for m in metrics:
        model = m.get("model", "unknown")
        model_latencies.setdefault(model, [])
        model_errors.setdefault(model, 0)
        if m["status"] == "error":
            model_errors[model] += 1
        if m["latency_total_ms"] > 0:
            model_latencies[model].append(m["latency_total_ms"])

    result = {}
    for model, lats in model_latencies.items():
        entry: Dict[str, Any] = {
            "call_count": len(lats),
            "error_count": model_errors[model],
        }
        if lats:
            sorted_lats = sorted(lats)
            p95_idx = min(int(len(sorted_lats) * 0.95), len(sorted_lats) - 1)
            entry.update({
                "avg_latency_ms": round(sum(lats) / len(lats), 2),
                "p95_latency_ms": round(sorted_lats[p95_idx], 2),
                "min_latency_ms": round(min(lats), 2),
                "max_latency_ms": round(max(lats), 2),
            })
        result[model] = entry

    return result
