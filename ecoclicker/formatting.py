from __future__ import annotations

from ecoclicker.report import SimulationReport


def format_number(value: float) -> str:
    """Compact currency display: 1234 -> 1.2K, 2500000 -> 2.5M."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1000:
        return f"{value / 1000:.1f}K"
    return str(int(value))


def format_harm(grams: float) -> str:
    """Harm is measured in grams of CO2."""
    if grams >= 1_000_000:
        return f"{grams / 1_000_000:.1f}T"
    if grams >= 1000:
        return f"{grams / 1000:.1f}kg"
    return f"{int(grams)}g"


def format_text_report(report: SimulationReport) -> str:
    """Format a playthrough report for console output."""
    lines: list[str] = []
    final = report.final_state

    lines.append("=" * 30 + f" {report.game_name} Playthrough " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Duration: {report.total_time:.1f}s")
    if final:
        clock = final["clock"]
        lines.append(
            f"World clock: Day {clock['day']}, {clock['hour']:02d}:{clock['minute']:02d}"
        )
    lines.append("")

    if final:
        rates = final["rates"]
        lines.append("FINAL STATE:")
        lines.append(f"  Currency: ${format_number(final['currency'])}")
        lines.append(f"  Total earned: ${format_number(final['total_earned'])}")
        lines.append(f"  Harm: {format_harm(final['harm'])} ({report.final_tier_label})")
        lines.append(f"  Income: {rates['currency_rate']:.2f}/s")
        lines.append(f"  Harm rate: {rates['harm_rate']:+.2f}/s")
        lines.append(f"  Click power: {rates['click_power']:.2f}")
        for channel, mult in sorted(rates["multipliers"].items()):
            lines.append(f"  {channel} multiplier: x{mult:.3f}")
        lines.append(f"  Power used: {final['power_consumed']:.1f}")
        lines.append(f"  Water used: {final['water_consumed']:.1f}")
        lines.append(f"  Requests served: {final['request_count']:.0f}")
        lines.append("")

    # Harm tiers
    lines.append("HARM:")
    lines.append(f"  Peak: {format_harm(report.peak_harm)}")
    for label, t in report.tier_first_reached.items():
        lines.append(f"  * {label:.<30s} first at {t:.1f}s")
    lines.append("")

    # Purchase summary
    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Clicks: {report.total_clicks}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")
    for upgrade_id, count in sorted(report.purchase_counts().items()):
        lines.append(f"  {upgrade_id:.<30s} x{count}")

    return "\n".join(lines)
