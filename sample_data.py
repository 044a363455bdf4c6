import numpy as np
import pandas as pd


class SampleFrameInitializer:
    """Deterministic attendance roster used when no file is given."""

    NAMES = ["Avery", "Blake", "Casey", "Devon", "Emery", "Finley", "Harper", "Jordan"]
    TEAMS = ["Platform", "Support", "Sales", "Finance", "Field Ops"]
    STATUSES = ["present", "present", "late", "remote", "present", "on leave", "absent"]

    def create(self, rows: int = 1000) -> pd.DataFrame:
        pos = np.arange(rows)
        status = [self.STATUSES[i % len(self.STATUSES)] for i in range(rows)]
        hours = np.round(6.0 + (pos % 9) * 0.5, 1)
        hours = np.where(np.isin(status, ["on leave", "absent"]), np.nan, hours)
        return pd.DataFrame(
            {
                "employee_id": [f"E{10000 + i}" for i in range(rows)],
                "name": [
                    f"{self.NAMES[i % len(self.NAMES)]} {chr(65 + (i * 7) % 26)}."
                    for i in range(rows)
                ],
                "team": [self.TEAMS[(i // 3) % len(self.TEAMS)] for i in range(rows)],
                "date": pd.date_range("2024-01-01", periods=rows, freq="D").date,
                "status": status,
                "hours": hours,
            }
        )
