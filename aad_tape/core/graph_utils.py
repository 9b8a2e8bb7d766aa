"""
Diagnostics for tapes: node listing and graph statistics.

Purely observational; nothing here touches tape state.
"""

import logging
from threading import Event
from typing import Dict, Optional

import numpy as np

from .errors import LogNodesCancelled


def log_nodes(tape, logger: logging.Logger, cancel: Optional[Event] = None, limit: int = 100) -> None:
    """
    Log the first `limit` nodes of `tape` at INFO level.

    Args:
        tape: GradientTape or HessianTape
        logger: destination logger
        cancel: polled before every node; when set, the listing stops and
                LogNodesCancelled is raised
        limit: maximum number of nodes to log
    """
    roots = tape.variable_count
    for i, node in enumerate(tape.nodes[:limit]):
        if cancel is not None and cancel.is_set():
            logger.info("Log nodes operation cancelled")
            raise LogNodesCancelled(f"cancelled after {i} of {min(limit, tape.node_count)} nodes")
        label = "Root Node" if i < roots else "Node"
        logger.info(node.LOG_TEMPLATE, label, i, *node.log_args())


def graph_stats(tape) -> Dict:
    """
    Graph statistics (no printing).

    Edges count real parents only; the sentinel self-reference of roots
    and of the spare parent of unary nodes is skipped.

    Returns:
        dict with nodes, roots, derived, edges, max_fan_in, avg_fan_in,
        max_fan_out, avg_fan_out
    """
    n_nodes = tape.node_count
    roots = tape.variable_count
    if n_nodes == 0:
        return {
            'nodes': 0,
            'roots': 0,
            'derived': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
        }

    fan_ins = [0] * n_nodes
    fan_outs = [0] * n_nodes
    for i, node in enumerate(tape.nodes):
        if i < roots:
            continue
        for p in (node.px, node.py):
            if p != i:
                fan_ins[i] += 1
                fan_outs[p] += 1

    return {
        'nodes': n_nodes,
        'roots': roots,
        'derived': n_nodes - roots,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
    }


def graph_summary(tape) -> str:
    """
    Text report of the graph structure.

    Returns:
        multi-line summary
    """
    stats = graph_stats(tape)

    if stats['nodes'] == 0:
        return "Empty computation graph"

    report = []
    report.append(f"{type(tape).__name__} graph summary:")
    report.append(f"  Total nodes:      {stats['nodes']:,}")
    report.append(f"  Root variables:   {stats['roots']:,}")
    report.append(f"  Derived nodes:    {stats['derived']:,}")
    report.append(f"  Total edges:      {stats['edges']:,}")
    report.append(f"  Max fan-out:      {stats['max_fan_out']}")
    report.append(f"  Avg fan-out:      {stats['avg_fan_out']:.2f}")

    if stats['derived'] < 1000:
        complexity = "Low"
    elif stats['derived'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"
    report.append(f"  Complexity level: {complexity}")

    return "\n".join(report)
