from dataclasses import asdict, dataclass, fields


@dataclass(frozen=True)
class Ruleset:
    colors: int = 4
    values: int = 13
    copies_per_tiletype: int = 2
    num_jokers: int = 2
    initial_hand_size: int = 14
    min_group_size: int = 3
    max_set_size: int = 4
    initial_meld_min_points: int = 30
    allow_rearranging_after_meld: bool = True

    def deck_size(self) -> int:
        normal_tiles = self.colors * self.values * self.copies_per_tiletype
        return normal_tiles + self.num_jokers

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Ruleset":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
