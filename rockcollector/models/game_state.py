"""
Game state aggregate and save blob (de)serialization.

The save blob is a single JSON document stored under one key:

    {
        "player": {"packsOpened", "uniquesOwned", "packsInventory"},
        "inventory": {"cards": [{"cardId", "art", "foil", "count"}]},
        "expeditions": [3 slots],
        "museum": {"background", "frame", "slots"}
    }

Schema migration is by field presence, not version number: any missing
section is backfilled with its default and the caller is told to re-save.
"""

from dataclasses import dataclass, field
from typing import Any

from rockcollector.models.expedition import ExpeditionSlot, PackGrant, SlotStatus
from rockcollector.models.inventory import BASE_ART, Foil, Inventory, InventoryCardEntry
from rockcollector.models.progress import PlayerProgress

EXPEDITION_SLOT_COUNT = 3
MUSEUM_SLOT_COUNT = 6

# Pack inventory of a brand new save. Also the set of tracked pack keys.
DEFAULT_PACK_INVENTORY: dict[str, int] = {
    "basic": 5,
    "explorer": 0,
    "advanced": 0,
    "deluxe": 0,
    "collector": 0,
}

DEFAULT_MUSEUM_BACKGROUND = "bg-forest"
DEFAULT_MUSEUM_FRAME = "frame-1"


@dataclass(frozen=True, slots=True)
class DisplayedCard:
    """A card variant placed in a museum slot."""

    card_id: str
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL


@dataclass
class MuseumState:
    """Museum display: cosmetic settings and a fixed row of slots."""

    background: str = DEFAULT_MUSEUM_BACKGROUND
    frame: str = DEFAULT_MUSEUM_FRAME
    slots: list[DisplayedCard | None] = field(
        default_factory=lambda: [None] * MUSEUM_SLOT_COUNT
    )


def _default_expeditions() -> list[ExpeditionSlot]:
    return [ExpeditionSlot() for _ in range(EXPEDITION_SLOT_COUNT)]


@dataclass
class GameState:
    """Everything that persists between sessions for one player."""

    player: PlayerProgress = field(
        default_factory=lambda: PlayerProgress(pack_inventory=dict(DEFAULT_PACK_INVENTORY))
    )
    inventory: Inventory = field(default_factory=Inventory)
    expeditions: list[ExpeditionSlot] = field(default_factory=_default_expeditions)
    museum: MuseumState = field(default_factory=MuseumState)

    def refresh_unique_count(self) -> int:
        """Recompute the cached unique card count from the inventory."""
        self.player.uniques_owned = self.inventory.unique_card_count()
        return self.player.uniques_owned

    # --- Serialization ---

    def to_save(self) -> dict[str, Any]:
        """Serialize to the save blob layout."""
        return {
            "player": {
                "packsOpened": self.player.packs_opened,
                "uniquesOwned": self.player.uniques_owned,
                "packsInventory": dict(self.player.pack_inventory),
            },
            "inventory": {
                "cards": [
                    {
                        "cardId": entry.card_id,
                        "art": entry.art,
                        "foil": entry.foil.value,
                        "count": entry.count,
                    }
                    for entry in self.inventory
                ]
            },
            "expeditions": [
                _slot_to_save(slot, index) for index, slot in enumerate(self.expeditions)
            ],
            "museum": {
                "background": self.museum.background,
                "frame": self.museum.frame,
                "slots": [
                    None
                    if shown is None
                    else {"cardId": shown.card_id, "art": shown.art, "foil": shown.foil.value}
                    for shown in self.museum.slots
                ],
            },
        }

    @classmethod
    def from_save(cls, blob: dict[str, Any] | None) -> tuple["GameState", bool]:
        """
        Build state from a save blob, backfilling missing sections.

        Returns:
            Tuple of (state, needs_save). needs_save is True when the blob
            was absent or any section/key had to be backfilled; the caller
            must persist the state immediately.
        """
        if blob is None:
            return cls(), True

        needs_save = False

        player_blob = blob.get("player")
        if not isinstance(player_blob, dict):
            player_blob = {}
            needs_save = True

        pack_inventory = player_blob.get("packsInventory")
        if not isinstance(pack_inventory, dict):
            pack_inventory = dict(DEFAULT_PACK_INVENTORY)
            needs_save = True
        else:
            pack_inventory = {str(k): int(v) for k, v in pack_inventory.items()}
            for pack_type in DEFAULT_PACK_INVENTORY:
                if pack_type not in pack_inventory:
                    pack_inventory[pack_type] = 0
                    needs_save = True

        inventory_blob = blob.get("inventory")
        if not isinstance(inventory_blob, dict) or "cards" not in inventory_blob:
            inventory_blob = {"cards": []}
            needs_save = True
        inventory = Inventory(cards=[_entry_from_save(raw) for raw in inventory_blob["cards"]])

        expeditions_blob = blob.get("expeditions")
        if not isinstance(expeditions_blob, list):
            expeditions = _default_expeditions()
            needs_save = True
        else:
            expeditions = [_slot_from_save(raw) for raw in expeditions_blob]
            if len(expeditions) > EXPEDITION_SLOT_COUNT:
                del expeditions[EXPEDITION_SLOT_COUNT:]
                needs_save = True
            while len(expeditions) < EXPEDITION_SLOT_COUNT:
                expeditions.append(ExpeditionSlot())
                needs_save = True
            for index, slot in enumerate(expeditions):
                if _is_stranded(slot):
                    expeditions[index] = ExpeditionSlot()
                    needs_save = True

        museum_blob = blob.get("museum")
        if not isinstance(museum_blob, dict):
            museum = MuseumState()
            needs_save = True
        else:
            museum = _museum_from_save(museum_blob)

        player = PlayerProgress(
            packs_opened=int(player_blob.get("packsOpened", 0)),
            uniques_owned=int(player_blob.get("uniquesOwned", inventory.unique_card_count())),
            pack_inventory=pack_inventory,
        )

        state = cls(player=player, inventory=inventory, expeditions=expeditions, museum=museum)
        return state, needs_save


def _entry_from_save(raw: dict[str, Any]) -> InventoryCardEntry:
    # Older saves stored minigame cards without art/foil fields
    return InventoryCardEntry(
        card_id=raw["cardId"],
        art=int(raw.get("art") or BASE_ART),
        foil=Foil(raw.get("foil") or Foil.NORMAL.value),
        count=int(raw.get("count", 1)),
    )


def _slot_to_save(slot: ExpeditionSlot, index: int) -> dict[str, Any]:
    if slot.status == SlotStatus.EMPTY:
        return {"status": SlotStatus.EMPTY.value}

    data: dict[str, Any] = {"status": slot.status.value, "slotIndex": index, "endTs": slot.end_ts}
    if slot.reward is not None:
        data["rewards"] = {
            "type": "pack",
            "packType": slot.reward.pack_type,
            "count": slot.reward.count,
        }
    return data


def _slot_from_save(raw: dict[str, Any]) -> ExpeditionSlot:
    status = SlotStatus(raw.get("status", SlotStatus.EMPTY.value))
    if status == SlotStatus.EMPTY:
        return ExpeditionSlot()

    reward = None
    rewards = raw.get("rewards")
    if isinstance(rewards, dict) and rewards.get("packType"):
        reward = PackGrant(pack_type=rewards["packType"], count=int(rewards.get("count", 1)))

    end_ts = raw.get("endTs")
    return ExpeditionSlot(
        status=status,
        end_ts=int(end_ts) if end_ts is not None else None,
        reward=reward,
    )


def _is_stranded(slot: ExpeditionSlot) -> bool:
    # An out slot needs a deadline to finish; a complete slot needs a reward to claim
    if slot.status == SlotStatus.OUT:
        return slot.end_ts is None
    if slot.status == SlotStatus.COMPLETE:
        return slot.reward is None
    return False


def _museum_from_save(raw: dict[str, Any]) -> MuseumState:
    slots: list[DisplayedCard | None] = []
    for shown in raw.get("slots", []):
        if shown is None:
            slots.append(None)
        else:
            slots.append(
                DisplayedCard(
                    card_id=shown["cardId"],
                    art=int(shown.get("art") or BASE_ART),
                    foil=Foil(shown.get("foil") or Foil.NORMAL.value),
                )
            )
    slots = (slots + [None] * MUSEUM_SLOT_COUNT)[:MUSEUM_SLOT_COUNT]

    return MuseumState(
        background=raw.get("background", DEFAULT_MUSEUM_BACKGROUND),
        frame=raw.get("frame", DEFAULT_MUSEUM_FRAME),
        slots=slots,
    )
