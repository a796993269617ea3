from dataclasses import dataclass, field


@dataclass
class PlayerProgress:
    """
    Progression counters and unopened packs.

    Attributes:
        packs_opened: Total packs opened over the save's lifetime
        uniques_owned: Cached distinct card count (recomputed on every card grant)
        pack_inventory: Unopened packs by pack type
    """

    packs_opened: int = 0
    uniques_owned: int = 0
    pack_inventory: dict[str, int] = field(default_factory=dict)

    def pack_count(self, pack_type: str) -> int:
        return self.pack_inventory.get(pack_type, 0)

    def add_packs(self, pack_type: str, count: int = 1) -> bool:
        """
        Grant packs of a known type.

        Returns False (and grants nothing) for a pack type the inventory
        does not track.
        """
        if pack_type not in self.pack_inventory:
            return False
        self.pack_inventory[pack_type] += count
        return True
