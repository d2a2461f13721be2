from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from lingotrail.application.identity.use_cases.get_user_by_id_use_case import GetUserByIdUseCase
from lingotrail.application.learning.services.journey_status_machine import (
    JourneyStatusMachine,
)
from lingotrail.application.learning.services.progress_aggregator import ProgressAggregator
from lingotrail.application.learning.use_cases.journey_assignment_use_case import (
    JourneyAssignmentUseCase,
)
from lingotrail.application.learning.use_cases.journey_invitation_use_case import (
    JourneyInvitationUseCase,
)
from lingotrail.application.learning.use_cases.journey_progress_use_case import (
    JourneyProgressUseCase,
)
from lingotrail.application.learning.use_cases.progress_use_case import (
    RecordFlashcardCompletionUseCase,
    SubmitQuizUseCase,
)
from lingotrail.config import get_settings
from lingotrail.infrastructure.identity.repositories.user_repository import UserRepository
from lingotrail.infrastructure.learning.repositories import (
    ContentRepository,
    InvitationRepository,
    JourneyAssignmentRepository,
    ProgressEventRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Provided per request through container.db.override(...)
    db = providers.Dependency(instance_of=Session)

    settings = providers.Singleton(get_settings)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    content_repository = providers.Factory(ContentRepository, db=db)
    progress_store = providers.Factory(ProgressEventRepository, db=db)
    journey_assignment_repository = providers.Factory(JourneyAssignmentRepository, db=db)
    invitation_repository = providers.Factory(InvitationRepository, db=db)

    # Application services
    progress_aggregator = providers.Factory(
        ProgressAggregator,
        content_repository=content_repository,
        progress_store=progress_store,
    )
    journey_status_machine = providers.Factory(
        JourneyStatusMachine,
        assignment_repository=journey_assignment_repository,
    )

    # Identity use cases
    get_user_by_id_use_case = providers.Factory(
        GetUserByIdUseCase,
        user_repository=user_repository,
    )

    # Learning use cases
    record_flashcard_completion_use_case = providers.Factory(
        RecordFlashcardCompletionUseCase,
        content_repository=content_repository,
        progress_store=progress_store,
    )
    submit_quiz_use_case = providers.Factory(
        SubmitQuizUseCase,
        content_repository=content_repository,
        progress_store=progress_store,
        pass_threshold=settings.provided.QUIZ_PASS_THRESHOLD,
    )
    journey_progress_use_case = providers.Factory(
        JourneyProgressUseCase,
        content_repository=content_repository,
        progress_aggregator=progress_aggregator,
    )
    journey_assignment_use_case = providers.Factory(
        JourneyAssignmentUseCase,
        content_repository=content_repository,
        assignment_repository=journey_assignment_repository,
        user_repository=user_repository,
        status_machine=journey_status_machine,
        progress_aggregator=progress_aggregator,
    )
    journey_invitation_use_case = providers.Factory(
        JourneyInvitationUseCase,
        content_repository=content_repository,
        invitation_repository=invitation_repository,
        status_machine=journey_status_machine,
        token_length=settings.provided.INVITATION_TOKEN_LENGTH,
    )


container = Container()
