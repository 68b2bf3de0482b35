from __future__ import annotations

from typing import Any, Dict, List


def print_summary(meta: Dict[str, Any]) -> None:
    """Print summary of the harvest run."""
    print("\n" + "="*60)
    print("YC FOUNDER HARVEST - SUMMARY")
    print("="*60)
    print(f"Run ID: {meta.get('run_id', 'N/A')}")
    print(f"Status: {meta.get('status', 'N/A')}")
    if meta.get("error"):
        print(f"Failed Stage: {meta.get('failed_stage', 'N/A')}")
        print(f"Error: {meta.get('error')}")
    print()
    print("Listing Phase:")
    print(f"  Listing Entries Seen: {meta.get('listing_emissions', 0)}")
    print(f"  Duplicates Discarded: {meta.get('duplicates_discarded', 0)}")
    print(f"  Unique Companies: {meta.get('unique_companies', 0)}")
    print()
    print("Detail Phase:")
    print(f"  Companies Written: {meta.get('companies_enriched', 0)}")
    print(f"  Companies Dropped: {meta.get('companies_dropped', 0)}")
    if meta.get("output_path"):
        print(f"Output File: {meta['output_path']}")
    print("="*60)


def summarize_records(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Counts for an output file loaded with read_harvest_output."""
    founders = sum(len(r.get("founders") or []) for r in records)
    with_links = sum(
        1 for r in records for f in (r.get("founders") or []) if f.get("links")
    )
    return {
        "records": len(records),
        "founders": founders,
        "founders_with_links": with_links,
        "companies": [r.get("name") for r in records],
    }
