from __future__ import annotations

from ecoclicker.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
    harm_bands: list[float] | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of a playthrough.

    *harm_bands* are absolute harm values drawn as tier boundaries.
    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install ecoclicker[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(
        f"{report.game_name}: {report.strategy_description}",
        fontsize=14,
    )
    times = [s.time for s in report.samples]

    # 1. Currency over time (log scale)
    ax1 = axes[0][0]
    if report.samples:
        _, values = zip(*report.currency_series())
        ax1.plot(times, [max(v, 1e-2) for v in values], label="currency")
        ax1.plot(
            times, [max(s.currency_rate, 1e-2) for s in report.samples], label="income/s"
        )
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_title("Economy")
    ax1.legend(fontsize=8)
    ax1.grid(True, alpha=0.3)

    # 2. Harm with tier boundaries
    ax2 = axes[0][1]
    if report.samples:
        _, harm = zip(*report.harm_series())
        ax2.plot(times, harm, color="darkred", label="harm")
    for band in harm_bands or []:
        ax2.axhline(band, color="gray", linestyle="--", alpha=0.6)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("CO2 (g)")
    ax2.set_title("Harm")
    ax2.legend(fontsize=8)
    ax2.grid(True, alpha=0.3)

    # 3. Sub-resource draw
    ax3 = axes[1][0]
    if report.samples:
        ax3.plot(times, [s.power_consumed for s in report.samples], label="power")
        ax3.plot(times, [s.water_consumed for s in report.samples], label="water")
        ax3.plot(times, [s.request_count for s in report.samples], label="requests")
    ax3.set_xlabel("Time (s)")
    ax3.set_title("Resource Draw")
    ax3.legend(fontsize=8)
    ax3.grid(True, alpha=0.3)

    # 4. Purchase timeline
    ax4 = axes[1][1]
    if report.purchases:
        upgrade_ids = sorted({p.upgrade_id for p in report.purchases})
        y_map = {u: i for i, u in enumerate(upgrade_ids)}
        ax4.scatter(
            [p.time for p in report.purchases],
            [y_map[p.upgrade_id] for p in report.purchases],
            s=10,
            alpha=0.6,
        )
        ax4.set_yticks(range(len(upgrade_ids)))
        ax4.set_yticklabels(upgrade_ids, fontsize=7)
        ax4.set_xlabel("Time (s)")
        ax4.set_title("Purchase Timeline")
        ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
