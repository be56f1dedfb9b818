from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import pandas as pd

from domain.hashes import HashLike, hashes_to_hex, utxo_input_ids_to_hex
from infrastructure.http_client import NodeAPIClient


REFERENCED_COLUMNS = [
    "hash",
    "is_referenced_by_milestone",
    "milestone_index",
    "milestone_timestamp",
]
OUTPUT_COLUMNS = ["output_id", "address", "amount", "spent"]


@dataclass
class LedgerSnapshotService:
    """
    Application service that queries a node through `NodeAPIClient` and
    returns flat views of the results (dicts / DataFrames) for reporting.
    """

    client: NodeAPIClient

    def node_summary(self) -> Dict[str, Any]:
        """
        Combine `/info` and `/tips` into a single flat record.
        """
        info = self.client.info()
        tips = self.client.tips()
        return {
            "name": info.name,
            "version": info.version,
            "network": info.operating_network,
            "is_healthy": info.is_healthy,
            "is_synced": info.is_synced,
            "peers": info.peers,
            "latest_milestone_index": info.latest_milestone_index,
            "latest_solid_milestone_index": info.latest_solid_milestone_index,
            # How far solidification lags behind the latest known milestone.
            "milestone_lag": info.latest_milestone_index - info.latest_solid_milestone_index,
            "pruning_index": info.pruning_index,
            "features": list(info.features),
            "tips": [tips.tip1, tips.tip2],
        }

    def referenced_status_df(
        self, hashes: Sequence[HashLike], transactions: bool = False
    ) -> pd.DataFrame:
        """
        One row per input hash telling whether it is referenced by a milestone.

        With `transactions=True` the hashes are treated as transaction
        payload hashes instead of message hashes.
        """
        encoded = hashes_to_hex(hashes)
        if not encoded:
            return pd.DataFrame(columns=REFERENCED_COLUMNS)

        if transactions:
            statuses = self.client.are_transactions_referenced_by_milestone(encoded)
        else:
            statuses = self.client.are_messages_referenced_by_milestone(encoded)

        if len(statuses) != len(encoded):
            raise ValueError(
                f"Node returned {len(statuses)} statuses for {len(encoded)} hashes."
            )

        rows: List[Dict[str, Any]] = []
        for h, status in zip(encoded, statuses):
            rows.append(
                {
                    "hash": h,
                    "is_referenced_by_milestone": status.is_referenced_by_milestone,
                    "milestone_index": status.milestone_index,
                    "milestone_timestamp": status.milestone_timestamp,
                }
            )
        return pd.DataFrame(rows, columns=REFERENCED_COLUMNS)

    def outputs_df(self, utxo_ids: Sequence[HashLike]) -> pd.DataFrame:
        """
        One row per output returned for the given UTXO input IDs.
        """
        encoded = utxo_input_ids_to_hex(utxo_ids)
        if not encoded:
            return pd.DataFrame(columns=OUTPUT_COLUMNS)

        outputs = self.client.outputs_by_hash(encoded)
        if len(outputs) != len(encoded):
            raise ValueError(
                f"Node returned {len(outputs)} outputs for {len(encoded)} ids."
            )

        rows: List[Dict[str, Any]] = []
        for output_id, output in zip(encoded, outputs):
            rows.append(
                {
                    "output_id": output_id,
                    "address": output.address,
                    "amount": output.amount,
                    "spent": output.spent,
                }
            )
        return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)
