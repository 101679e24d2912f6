"""
EntityRegistry - which character ids a page or panel may reference.

Main characters come from the cast roster and carry a consistency seed.
Anything else a page lists is an anonymous, page-scoped extra: allowed on
that page only and never seeded.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from comic_planner.models import Character, CharacterInPanel, PanelDialogue, PanelDraft

logger = logging.getLogger("comic_planner.entities")

MAIN_PREFIX = "char-"


@dataclass(frozen=True)
class PageScope:
    """Reference whitelist of one page."""
    page_id: str
    main: Tuple[str, ...]
    anonymous: Tuple[str, ...]
    rejected: Tuple[str, ...] = ()

    @property
    def allowed(self) -> FrozenSet[str]:
        return frozenset(self.main) | frozenset(self.anonymous)

    def describe(self) -> str:
        return ", ".join(self.main + self.anonymous) or "none"


class EntityRegistry:
    """Read-only view of the cast roster shared by all concurrent units."""

    def __init__(self, roster: Sequence[Character]):
        self.roster: Tuple[Character, ...] = tuple(roster)
        self._by_id: Dict[str, Character] = {c.id: c for c in self.roster}

    @property
    def main_ids(self) -> List[str]:
        return list(self._by_id)

    def get(self, character_id: str) -> Character:
        return self._by_id[character_id]

    def is_main(self, entity_id: str) -> bool:
        return entity_id in self._by_id

    def scope_for(self, references: Iterable[str], page_id: str) -> PageScope:
        """Partition a page's character list into main and anonymous ids."""
        main: List[str] = []
        anonymous: List[str] = []
        rejected: List[str] = []
        for ref in references:
            ref = (ref or "").strip()
            if not ref or ref in main or ref in anonymous:
                continue
            if ref.startswith(MAIN_PREFIX):
                if ref in self._by_id:
                    main.append(ref)
                else:
                    rejected.append(ref)
            else:
                anonymous.append(ref)

        if rejected:
            logger.warning(f"[ENTITIES] {page_id}: unknown main character(s) {rejected}, removing")
        return PageScope(
            page_id=page_id,
            main=tuple(main),
            anonymous=tuple(anonymous),
            rejected=tuple(rejected),
        )

    def is_allowed(self, entity_id: str, scope: PageScope) -> bool:
        return entity_id in scope.allowed

    def filter_panel(
        self,
        draft: PanelDraft,
        scope: PageScope,
        unit_id: str = "",
    ) -> Tuple[List[CharacterInPanel], List[PanelDialogue], List[str]]:
        """Strip references the page does not allow from characters and dialogue."""
        dropped: List[str] = []
        characters = []
        for character in draft.characters:
            if self.is_allowed(character.character_id, scope):
                characters.append(character)
            else:
                dropped.append(character.character_id)

        dialogue = []
        for line in draft.dialogue:
            if self.is_allowed(line.character_id, scope):
                dialogue.append(line)
            else:
                dropped.append(line.character_id)

        if dropped:
            logger.warning(
                f"[ENTITIES] {unit_id or scope.page_id}: "
                f"character(s) {dropped} not in scene [{scope.describe()}], removing"
            )
        return characters, dialogue, dropped

    def seeds_for(self, character_ids: Iterable[str]) -> Dict[str, int]:
        """Consistency seeds of the main characters among ``character_ids``."""
        return {
            cid: self._by_id[cid].seed
            for cid in character_ids
            if cid in self._by_id
        }

    def characters_in(self, scope: PageScope) -> List[Character]:
        return [self._by_id[cid] for cid in scope.main]
