from __future__ import annotations

import logging
from pathlib import Path
import sys


def main() -> None:
    """
    Script entry point:
      - wires up `src/` on sys.path
      - loads `config/node.yaml` (plus NODE_API_* env overrides)
      - prints a status summary of the configured node
    """
    project_root = Path(__file__).resolve().parent
    src_path = project_root / "src"

    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from application.ledger_snapshot import LedgerSnapshotService  # type: ignore[import]
    from domain.config import load_client_config  # type: ignore[import]
    from infrastructure.http_client import NodeAPIClient  # type: ignore[import]

    config = load_client_config(project_root / "config" / "node.yaml")

    with NodeAPIClient.from_config(config) as client:
        summary = LedgerSnapshotService(client=client).node_summary()

    print(f"Node: {summary['name']} {summary['version']} ({summary['network']})")
    print(f"Healthy: {summary['is_healthy']}  Synced: {summary['is_synced']}  Peers: {summary['peers']}")
    print(
        f"Milestones: latest {summary['latest_milestone_index']}, "
        f"solid {summary['latest_solid_milestone_index']} (lag {summary['milestone_lag']})"
    )
    print("Tips:")
    for tip in summary["tips"]:
        print(f"  - {tip}")


if __name__ == "__main__":
    main()
