#!/usr/bin/env python3
"""
Example: List the workspaces of a shared space

Usage:
    OCTANE_SERVER_URL=https://... OCTANE_USER=... OCTANE_PASSWORD=... \
    OCTANE_SHARED_SPACE=1001 python list_workspaces.py
"""

from octane_sdk import NO_ENTITY, NO_WORKSPACE_ID, OctaneClient
from octane_sdk.config import load_settings


def main():
    settings = load_settings()

    with OctaneClient.from_settings(settings) as client:
        admin = client.context(shared_space=settings.shared_space, workspace=NO_WORKSPACE_ID)

        print(f"📂 Workspaces of shared space {settings.shared_space}\n")
        for workspace in admin.entity_list(NO_ENTITY).iter_all():
            print(f"  • {workspace.id} - {workspace.name}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"❌ Error: {e}")
        exit(1)
