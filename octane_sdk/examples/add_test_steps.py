#!/usr/bin/env python3
"""
Example: Append steps to a manual test script

Usage:
    OCTANE_SERVER_URL=https://... python add_test_steps.py <test-id>
"""

import sys

from octane_sdk import OctaneClient, TestStep, ValidationStep
from octane_sdk.config import load_settings


def main():
    test_id = sys.argv[1]
    settings = load_settings()

    with OctaneClient.from_settings(settings) as client:
        octane = client.context(shared_space=settings.shared_space, workspace=settings.workspace)
        manual_tests = octane.manual_tests()

        script = manual_tests.get_script(test_id)
        script.append(TestStep("Sign out"))
        script.append(ValidationStep("The login page is shown"))
        manual_tests.update_script(test_id, script, comment="Add sign out check")

        print(f"✅ Test {test_id} now has {len(script)} steps")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"❌ Error: {e}")
        exit(1)
