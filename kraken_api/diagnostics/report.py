"""
Diagnostics Report — Formats and displays suite results.
"""

from datetime import datetime, timezone


def print_banner():
    print()
    print("  ╔═══════════════════════════════════════════════╗")
    print("  ║     K R A K E N   A P I                       ║")
    print("  ║        Diagnostics Runner                     ║")
    print("  ╚═══════════════════════════════════════════════╝")
    print()


def print_section(title: str):
    padding = max(0, 48 - len(title))
    print(f"\n  ── {title} {'─' * padding}")


def print_result(result: dict):
    icon = "✅" if result["passed"] else "❌"
    print(f"    {icon} {result['name']}")
    if result.get("detail"):
        print(f"        → {result['detail']}")


def group_by_suite(all_results: list[dict]) -> dict[str, list[dict]]:
    """Results are named "<Suite>: <check>"; group on the prefix."""
    suites: dict[str, list[dict]] = {}
    for r in all_results:
        prefix = r["name"].split(":")[0].strip()
        suites.setdefault(prefix, []).append(r)
    return suites


def print_verdict(all_results: list[dict], elapsed: float) -> bool:
    """Print the summary. Returns True if every check passed."""
    total = len(all_results)
    failures = [r for r in all_results if not r["passed"]]

    print()
    print("  ══ Verdict ════════════════════════════════════════")
    print()

    for suite_name, results in group_by_suite(all_results).items():
        ok = sum(1 for r in results if r["passed"])
        icon = "✅" if ok == len(results) else "❌"
        print(f"    {icon} {suite_name}: {ok}/{len(results)}")

    print()
    print(f"    Total: {total - len(failures)}/{total} passed")
    print(f"    Time:  {elapsed:.1f}s")

    if failures:
        print()
        print("    Failed:")
        for r in failures:
            print(f"      - {r['name']}: {r.get('detail', '')}")

    print()
    if not failures:
        print("  🟢 ALL DIAGNOSTICS PASSED")
    else:
        print("  🔴 DIAGNOSTICS FAILED — Review errors above")
    print()
    return not failures


def format_json_report(all_results: list[dict], elapsed: float) -> dict:
    """Return results as a structured dict (for programmatic use)."""
    total = len(all_results)
    passed = sum(1 for r in all_results if r["passed"])

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "elapsed_seconds": round(elapsed, 2),
        "total": total,
        "passed": passed,
        "failed": total - passed,
        "all_passed": passed == total,
        "suites": {
            name: {"passed": sum(1 for r in rs if r["passed"]), "total": len(rs)}
            for name, rs in group_by_suite(all_results).items()
        },
        "results": all_results,
    }
