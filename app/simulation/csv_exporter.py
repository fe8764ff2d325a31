"""
simulation/csv_exporter.py

Export DC solve results to CSV format.
No Qt dependencies; choosing the destination file is the caller's job.
"""

import csv
import io
from datetime import datetime


def export_op_results(node_voltages, source_currents=None, branch_currents=None, circuit_name=""):
    """
    Export DC operating point results to a CSV string.

    Args:
        node_voltages: dict mapping node label -> voltage (float)
        source_currents: optional dict mapping voltage source id -> current (float)
        branch_currents: optional dict mapping component id -> current (float)
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["# Analysis Type", "DC Operating Point"])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    writer.writerow([])

    writer.writerow(["Node", "Voltage (V)"])
    for node, voltage in node_voltages.items():
        writer.writerow([node, voltage])

    if source_currents:
        writer.writerow([])
        writer.writerow(["Source", "Current (A)"])
        for source, current in source_currents.items():
            writer.writerow([source, current])

    if branch_currents:
        writer.writerow([])
        writer.writerow(["Component", "Current (A)"])
        for comp_id, current in branch_currents.items():
            writer.writerow([comp_id, current])

    return output.getvalue()
