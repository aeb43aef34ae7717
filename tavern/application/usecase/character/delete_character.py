"""Delete public character use case."""

import logfire
from pydantic import BaseModel

from tavern.application.usecase.base import require_owner
from tavern.domain.model import Principal
from tavern.domain.service import CharacterService, CommentService
from tavern.domain.value import CharacterId, TargetType


class DeleteCharacterRequest(BaseModel):
    """Delete character request."""

    character_id: str
    principal: Principal | None = None


class DeleteCharacterResponse(BaseModel):
    """Delete character response."""

    success: bool = True


class DeleteCharacterUseCase:
    """Use case for removing a character, its comments and its card file."""

    def __init__(
        self, character_service: CharacterService, comment_service: CommentService
    ) -> None:
        """Initialize delete character use case.

        Args:
            character_service: Character domain service
            comment_service: Comment domain service
        """
        self.character_service = character_service
        self.comment_service = comment_service

    async def execute(self, request: DeleteCharacterRequest) -> DeleteCharacterResponse:
        """Execute delete character flow.

        Raises:
            NotFoundError: If character not found
            NotAuthenticatedError: If the request is anonymous
            PermissionDeniedError: If the caller is neither uploader nor admin
        """
        character = await self.character_service.get_character(
            CharacterId(request.character_id)
        )
        principal = require_owner(
            request.principal, character.uploader.handle, "Character", character.id
        )

        # Comments first so a failure below never strands them
        removed = await self.comment_service.delete_for_target(
            TargetType.CHARACTER, character.id
        )
        await self.character_service.delete_character(character)

        logfire.info(
            "Character deleted by user",
            character_id=character.id,
            handle=principal.handle,
            comments_removed=removed,
        )
        return DeleteCharacterResponse()
