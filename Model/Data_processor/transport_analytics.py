# Model/Data_processor/transport_analytics.py
"""
Class for computing dashboard metrics from a snapshot of the transport state.
"""
import numpy as np
import pandas as pd

from Model.log_setup import setup_logger
from Model.model_transportation_request import PRIORITY_ORDER

WORKLOAD_CAPACITY = 5


class TransportAnalytics:
    """
    Turns the request, staff and equipment collections into DataFrames and
    derives the figures shown on the dashboard, the zone statistics panel,
    the request queue and the staff workload list.
    """

    def __init__(self, state, hospital):
        """
        Initialize the TransportAnalytics with one state snapshot.

        Args:
            state: ApplicationState to analyze
            hospital: Hospital providing the floor and zone layout
        """
        self.state = state
        self.hospital = hospital
        self.logger = setup_logger("TransportAnalytics")
        self.requests = self._frame(
            [r.to_dict() for r in state.requests.values()],
            ["id", "priority", "status", "equipment_type", "requested_at"],
        )
        self.staff = self._frame(
            [self._flatten(s.to_dict()) for s in state.staff.values()],
            ["id", "name", "status", "current_workload", "completed_today", "floor", "zone"],
        )
        self.equipment = self._frame(
            [self._flatten(e.to_dict()) for e in state.equipment.values()],
            ["id", "type", "status", "current_request", "assigned_staff", "floor", "zone"],
        )

    @staticmethod
    def _frame(rows, columns):
        return pd.DataFrame(rows, columns=None if rows else columns)

    @staticmethod
    def _flatten(row):
        location = row.pop("location")
        row.update(location)
        return row

    @staticmethod
    def _rate(part, whole):
        return round(float(part) / whole * 100, 1) if whole else 0.0

    def summary(self):
        """
        Build the dashboard summary.

        Returns:
            dict: request, staff and equipment figures
        """
        self.logger.debug(f"Computing summary for state version {self.state.version}")
        requests, staff, equipment = self.requests, self.staff, self.equipment

        status_counts = requests["status"].value_counts() if len(requests) else pd.Series(dtype=int)
        priority_counts = requests["priority"].value_counts() if len(requests) else pd.Series(dtype=int)
        total_requests = len(requests)
        completed = int(status_counts.get("completed", 0))

        total_staff = len(staff)
        workloads = staff["current_workload"].to_numpy() if total_staff else np.array([])

        total_equipment = len(equipment)
        in_use = int((equipment["status"] == "in-use").sum()) if total_equipment else 0

        return {
            "requests": {
                "total": total_requests,
                "by_status": {status: int(count) for status, count in status_counts.items()},
                "by_priority": {p: int(priority_counts.get(p, 0)) for p in PRIORITY_ORDER},
                "completion_rate": self._rate(completed, total_requests),
            },
            "staff": {
                "total": total_staff,
                "available": int((staff["status"] == "available").sum()) if total_staff else 0,
                "busy": int((staff["status"] == "busy").sum()) if total_staff else 0,
                "average_workload": round(float(workloads.mean()), 1) if total_staff else 0.0,
                "workload_std": round(float(np.std(workloads)), 2) if total_staff else 0.0,
                "completed_today": int(staff["completed_today"].sum()) if total_staff else 0,
            },
            "equipment": {
                "total": total_equipment,
                "available": int((equipment["status"] == "available").sum()) if total_equipment else 0,
                "in_use": in_use,
                "maintenance": int((equipment["status"] == "maintenance").sum()) if total_equipment else 0,
                "requested": int((equipment["status"] == "requested").sum()) if total_equipment else 0,
                "utilization_rate": self._rate(in_use, total_equipment),
                "utilization_by_type": self.utilization_by_type(),
            },
        }

    def utilization_by_type(self):
        """Share of each equipment type currently in use, in percent."""
        result = {}
        if not len(self.equipment):
            return result
        for equipment_type, group in self.equipment.groupby("type"):
            result[equipment_type] = self._rate((group["status"] == "in-use").sum(), len(group))
        return result

    def zone_statistics(self, floor_number):
        """
        Per-zone counts for one floor, in the order the zones are configured.

        Args:
            floor_number: floor to report on

        Returns:
            list: one dict per configured zone, empty when the floor has no zones
        """
        floor = self.hospital.get_floor(floor_number)
        if floor is None:
            return []

        stats = []
        for zone in floor.zones:
            equipment = self._in_zone(self.equipment, floor_number, zone.name)
            staff = self._in_zone(self.staff, floor_number, zone.name)

            assigned_equipment = equipment[
                (equipment["status"] == "in-use")
                | equipment["current_request"].notna()
                | equipment["assigned_staff"].notna()
            ] if len(equipment) else equipment
            assigned_staff = staff[
                (staff["status"] == "busy") | (staff["current_workload"] > 0)
            ] if len(staff) else staff

            stats.append({
                "zone": zone.name,
                "capacity": zone.capacity,
                "equipment": len(equipment),
                "staff": len(staff),
                "available_equipment": int((equipment["status"] == "available").sum()) if len(equipment) else 0,
                "available_staff": int((staff["status"] == "available").sum()) if len(staff) else 0,
                "assigned_equipment": assigned_equipment["id"].tolist() if len(assigned_equipment) else [],
                "assigned_staff": assigned_staff["id"].tolist() if len(assigned_staff) else [],
            })
        return stats

    @staticmethod
    def _in_zone(frame, floor_number, zone_name):
        if not len(frame):
            return frame
        return frame[(frame["floor"] == floor_number) & (frame["zone"] == zone_name)]

    def request_queue(self, status=None):
        """Requests sorted by priority (emergency first), then oldest first."""
        requests = [r for r in self.state.requests.values() if status is None or r.status == status]
        return [r.to_dict() for r in sorted(requests, key=lambda r: r.queue_key())]

    def staff_workload(self):
        """Staff ordered available first, then by ascending workload."""
        members = sorted(
            self.state.staff.values(),
            key=lambda s: (0 if s.status == "available" else 1, s.current_workload),
        )
        return [
            {
                **s.to_dict(),
                "workload_progress": min(s.current_workload / WORKLOAD_CAPACITY * 100, 100),
            }
            for s in members
        ]
