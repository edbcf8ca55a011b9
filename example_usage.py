#!/usr/bin/env python3
"""
Basic usage examples for PTV Python client library.

This script demonstrates how to build signed PTV Timetable API URLs and
fetch them. Set PTV_DEVELOPER_ID and PTV_DEVELOPER_KEY before running.
"""

import logging
import sys

from ptv_client import (
    ConfigurationError,
    HTTPError,
    PTVClient,
    PTVClientError,
    TRAIN,
    TRAM,
    verify_url
)

FLINDERS_STREET = 1071


def main():
    """Run basic usage examples."""

    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    print("=== PTV Python Client Basic Usage Examples ===\n")

    # Example 1: Credentials are checked when a URL is built
    print("1. Building a URL without credentials...")
    try:
        PTVClient().route_types()
    except ConfigurationError as e:
        print(f"   ✓ Rejected: {e}\n")

    # Create PTV client
    print("2. Creating PTV client from environment...")
    client = PTVClient.from_env()
    print(f"   Developer id: {client.credentials.developer_id}\n")

    try:
        # Example 2: Build and inspect a signed URL, no network involved
        print("3. Building a signed URL...")
        signed = client.routes(route_types=[TRAIN, TRAM], route_name="Glen Waverley")
        print(f"   URL: {signed.url}")
        print(f"   Signature valid: {verify_url(signed.url, client.credentials.developer_key)}\n")

        # Example 3: Fetch departures
        print("4. Fetching departures from Flinders Street...")
        response = client.departures(TRAIN, FLINDERS_STREET, {'max_results': 3, 'expand': ['route']}).get()
        print(f"   ✓ {len(response['departures'])} departures, server time {response['time']}")
        print(f"   Took {response['execution']:.3f}s\n")

        # Example 4: Search
        print("5. Searching for 'Glen Waverley'...")
        response = client.search("Glen Waverley", {'route_types': [TRAIN]}).get()
        for stop in response.get('stops', [])[:3]:
            print(f"   {stop['stop_id']}: {stop['stop_name']}")
        print()

        # Example 5: Error handling
        print("6. Demonstrating error handling...")
        wrong_client = PTVClient(client.credentials.developer_id, "wrong-key")
        try:
            wrong_client.route_types().get()
            print("   ✗ Unexpected success")
        except HTTPError as e:
            print(f"   ✓ Correctly rejected wrong key ({e.status_code})")
        finally:
            wrong_client.close()

    except PTVClientError as e:
        print(f"Error: {e}")
        return 1
    finally:
        client.close()

    print("\n=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
