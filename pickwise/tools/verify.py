"""
Fact-check a running PickWise server against canned shopping queries.

The model is non-deterministic, so this is a smoke check for humans rather than
a test suite: it posts each query, then checks that the answers name real
brands, link to official sites and quote plausible prices.

    pickwise-verify --base-url http://localhost:5000
"""
import argparse
import re
import sys
import time
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

console = Console()

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


class VerificationCase(BaseModel):
    name: str
    search_query: str
    min_features: int
    max_features: int
    min_price: float
    max_price: float
    real_brands: List[str]
    valid_websites: List[str]
    required_specs: List[str] = Field(default_factory=list)


class FactCheck(BaseModel):
    case: str
    checks: Dict[str, bool] = Field(default_factory=dict)
    issues: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.error is None and all(self.checks.values())


DEFAULT_CASES = [
    VerificationCase(
        name="Budget Smartphones",
        search_query="smartphones under $300 with good cameras",
        min_features=8,
        max_features=15,
        min_price=100,
        max_price=300,
        real_brands=["Samsung", "Xiaomi", "Realme", "Nokia", "Motorola", "OnePlus"],
        valid_websites=["samsung.com", "mi.com", "realme.com", "nokia.com", "motorola.com", "oneplus.com"],
    ),
    VerificationCase(
        name="Gaming Laptops",
        search_query="gaming laptops under $1000",
        min_features=10,
        max_features=15,
        min_price=600,
        max_price=1000,
        real_brands=["Acer", "ASUS", "Dell", "HP", "Lenovo", "MSI"],
        valid_websites=["acer.com", "asus.com", "dell.com", "hp.com", "lenovo.com", "msi.com"],
        required_specs=["NVIDIA", "AMD", "Intel"],
    ),
    VerificationCase(
        name="Wireless Headphones",
        search_query="wireless headphones under $150 with noise cancellation",
        min_features=6,
        max_features=12,
        min_price=50,
        max_price=150,
        real_brands=["Sony", "Bose", "Audio-Technica", "Anker", "JBL", "Sennheiser"],
        valid_websites=["sony.com", "bose.com", "audio-technica.com", "soundcore.com", "jbl.com", "sennheiser.com"],
    ),
]


def first_price(pricing: str) -> Optional[float]:
    match = _NUMBER.search(pricing.replace(",", ""))
    return float(match.group()) if match else None


def fact_check(case: VerificationCase, payload: Dict[str, Any]) -> FactCheck:
    products = payload.get("products") or []
    features = payload.get("features") or []
    result = FactCheck(case=case.name)

    result.checks["product_count"] = 0 < len(products) <= 3
    if not result.checks["product_count"]:
        result.issues.append(f"Expected 1-3 products, got {len(products)}")

    result.checks["feature_count"] = case.min_features <= len(features) <= case.max_features
    if not result.checks["feature_count"]:
        result.issues.append(f"Expected {case.min_features}-{case.max_features} features, got {len(features)}")

    result.checks["ratings_null"] = all(p.get("rating") is None for p in products)
    if not result.checks["ratings_null"]:
        result.issues.append("Some products carry a rating")

    brands = [b.lower() for b in case.real_brands]
    result.checks["brand_authenticity"] = all(
        any(b in str(p.get("name", "")).lower() for b in brands) for p in products
    )
    if not result.checks["brand_authenticity"]:
        result.issues.append("Some products don't match expected authentic brands")

    result.checks["website_validity"] = all(
        any(site in str(p.get("website", "")).lower() for site in case.valid_websites) for p in products
    )
    if not result.checks["website_validity"]:
        result.issues.append("Some websites don't match expected official domains")

    prices = [first_price(str(p.get("pricing", ""))) for p in products]
    result.checks["price_realism"] = all(
        price is not None and case.min_price <= price <= case.max_price for price in prices
    )
    if not result.checks["price_realism"]:
        result.issues.append(f"Some prices are outside expected range ${case.min_price:g}-${case.max_price:g}")

    if case.required_specs:
        blobs = [str(p).lower() for p in products]
        result.checks["spec_authenticity"] = any(
            spec.lower() in blob for blob in blobs for spec in case.required_specs
        )
        if not result.checks["spec_authenticity"]:
            result.issues.append("Missing expected technical specifications")

    return result


def run_case(client: httpx.Client, case: VerificationCase) -> FactCheck:
    try:
        resp = client.post("/api/compare", json={"searchQuery": case.search_query})
        resp.raise_for_status()
        return fact_check(case, resp.json())
    except httpx.HTTPError as exc:
        return FactCheck(case=case.name, error=str(exc))


def render(results: List[FactCheck]) -> None:
    table = Table(title="PickWise verification")
    table.add_column("Case")
    table.add_column("Result")
    table.add_column("Issues")
    for r in results:
        status = "[green]PASS[/green]" if r.passed else "[red]FAIL[/red]"
        table.add_row(r.case, status, r.error or "\n".join(r.issues) or "-")
    console.print(table)
    passed = sum(r.passed for r in results)
    console.print(f"Success rate: {passed}/{len(results)}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fact-check comparisons from a running PickWise server")
    parser.add_argument("--base-url", default="http://localhost:5000", help="Server URL (default: %(default)s)")
    parser.add_argument("--timeout", type=float, default=60.0, help="Per-request timeout in seconds")
    parser.add_argument("--pause", type=float, default=2.0, help="Seconds to wait between cases")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    results = []
    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        for i, case in enumerate(DEFAULT_CASES):
            if i:
                time.sleep(args.pause)
            console.print(f"Running [bold]{case.name}[/bold]: {case.search_query!r}")
            results.append(run_case(client, case))
    render(results)
    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
