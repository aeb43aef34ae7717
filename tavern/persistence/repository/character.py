"""PostgreSQL implementation of Character repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update

from tavern.domain.model import Character
from tavern.domain.repository import CharacterRepository
from tavern.domain.value import CharacterId
from tavern.persistence.mappers import character_to_dict, row_to_character
from tavern.persistence.repository.base import PostgresRepository, like_pattern
from tavern.persistence.tables import public_characters_table

# Listings skip the (possibly large) card payload
_SUMMARY_COLUMNS = [
    column
    for column in public_characters_table.c
    if column.name != "character_data"
]


class PostgresCharacterRepository(PostgresRepository, CharacterRepository):
    """PostgreSQL implementation of CharacterRepository."""

    async def find_by_id(self, character_id: CharacterId) -> Optional[Character]:
        """Find a character by ID, including its card data."""
        stmt = select(public_characters_table).where(
            public_characters_table.c.id == character_id
        )
        result = await self._execute(
            stmt, "character.find_by_id", character_id=character_id
        )
        row = result.fetchone()
        return row_to_character(row._asdict()) if row else None

    async def find_all(
        self,
        query: Optional[str] = None,
        uploader_handle: Optional[str] = None,
        tags: Sequence[str] = (),
        limit: int = 1000,
        offset: int = 0,
    ) -> List[Character]:
        """Find characters, most recently uploaded first."""
        with logfire.span(
            "character_repository.find_all",
            query=query,
            uploader_handle=uploader_handle,
            tags=list(tags),
            limit=limit,
            offset=offset,
        ):
            table = public_characters_table
            stmt = select(*_SUMMARY_COLUMNS)

            if query:
                pattern = like_pattern(query)
                stmt = stmt.where(
                    or_(
                        table.c.name.ilike(pattern, escape="\\"),
                        table.c.description.ilike(pattern, escape="\\"),
                        func.array_to_string(table.c.tags, " ").ilike(
                            pattern, escape="\\"
                        ),
                    )
                )
            if uploader_handle:
                stmt = stmt.where(table.c.uploader_handle == uploader_handle)
            if tags:
                stmt = stmt.where(table.c.tags.contains(list(tags)))

            stmt = stmt.order_by(desc(table.c.uploaded_at)).limit(limit).offset(offset)

            result = await self._execute(stmt, "character.find_all")
            characters = [row_to_character(row._asdict()) for row in result.fetchall()]
            logfire.info("Found characters", count=len(characters))
            return characters

    async def save(self, character: Character) -> Character:
        """Save a character (create or update)."""
        data = character_to_dict(character)
        existing = await self.find_by_id(character.id)

        if existing:
            data.pop("id")
            for counter in ("downloads", "views", "likes"):
                data.pop(counter)
            stmt = (
                update(public_characters_table)
                .where(public_characters_table.c.id == character.id)
                .values(**data)
            )
        else:
            stmt = insert(public_characters_table).values(**data)

        await self._execute(stmt, "character.save", character_id=character.id)
        await self._flush("character.save")
        return await self.find_by_id(character.id) or character

    async def delete(self, character_id: CharacterId) -> bool:
        """Delete a character (hard delete)."""
        stmt = delete(public_characters_table).where(
            public_characters_table.c.id == character_id
        )
        result = await self._execute(
            stmt, "character.delete", character_id=character_id
        )
        await self._flush("character.delete")
        return (result.rowcount or 0) > 0

    async def _increment(
        self, character_id: CharacterId, column: str
    ) -> Optional[Character]:
        stmt = (
            update(public_characters_table)
            .where(public_characters_table.c.id == character_id)
            .values({column: public_characters_table.c[column] + 1})
            .returning(public_characters_table)
        )
        operation = f"character.increment_{column}"
        result = await self._execute(stmt, operation, character_id=character_id)
        row = result.fetchone()
        await self._flush(operation)
        return row_to_character(row._asdict()) if row else None

    async def increment_views(self, character_id: CharacterId) -> Optional[Character]:
        """Atomically increment views by 1."""
        return await self._increment(character_id, "views")

    async def increment_downloads(
        self, character_id: CharacterId
    ) -> Optional[Character]:
        """Atomically increment downloads by 1."""
        return await self._increment(character_id, "downloads")
