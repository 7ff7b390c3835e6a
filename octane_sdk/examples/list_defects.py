#!/usr/bin/env python3
"""
Example: List the newest defects of a workspace

Usage:
    OCTANE_SERVER_URL=https://... OCTANE_CLIENT_ID=... OCTANE_CLIENT_SECRET=... \
    OCTANE_SHARED_SPACE=1001 OCTANE_WORKSPACE=1002 python list_defects.py
"""

from octane_sdk import OctaneClient
from octane_sdk.config import load_settings


def main():
    settings = load_settings()

    with OctaneClient.from_settings(settings) as client:
        octane = client.context(shared_space=settings.shared_space, workspace=settings.workspace)
        defects = octane.entity_list("defects").get(
            fields=["name", "severity", "phase"],
            order_by="-creation_time",
            limit=10,
        )

        print(f"🐞 {defects.total_count} defects, newest {len(defects)}:\n")
        for defect in defects:
            severity = defect.get_value("severity")
            label = severity.name if severity else "no severity"
            print(f"  • {defect.id} ({label}) - {defect.name}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"❌ Error: {e}")
        exit(1)
