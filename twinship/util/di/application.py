"""Application layer DI providers."""

from dishka import Scope, provide

from twinship.application.usecase.deep_link import (
    ClearPendingInvitationUseCase,
    GetPendingInvitationUseCase,
    HandleDeepLinkUseCase,
    ProcessPendingInvitationUseCase,
)
from twinship.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateAndSendInvitationUseCase,
    DeclineInvitationUseCase,
    GetAnalyticsUseCase,
    MarkDeliveredUseCase,
    RetryInvitationUseCase,
    ValidateInvitationUseCase,
)
from twinship.domain.service import (
    AnalyticsAggregator,
    ChannelDispatcher,
    DeepLinkRouter,
    InvitationService,
    RetryManager,
)
from twinship.util.clock import Clock
from twinship.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invitation use cases
    @provide
    def get_create_and_send_invitation_use_case(
        self,
        invitation_service: InvitationService,
        dispatcher: ChannelDispatcher,
    ) -> CreateAndSendInvitationUseCase:
        """Provide create and send invitation use case."""
        return CreateAndSendInvitationUseCase(
            invitation_service=invitation_service, dispatcher=dispatcher
        )

    @provide
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService, deep_link_router: DeepLinkRouter
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service, deep_link_router=deep_link_router
        )

    @provide
    def get_decline_invitation_use_case(
        self, invitation_service: InvitationService, deep_link_router: DeepLinkRouter
    ) -> DeclineInvitationUseCase:
        """Provide decline invitation use case."""
        return DeclineInvitationUseCase(
            invitation_service=invitation_service, deep_link_router=deep_link_router
        )

    @provide
    def get_retry_invitation_use_case(
        self, invitation_service: InvitationService, retry_manager: RetryManager
    ) -> RetryInvitationUseCase:
        """Provide retry invitation use case."""
        return RetryInvitationUseCase(
            invitation_service=invitation_service, retry_manager=retry_manager
        )

    @provide
    def get_validate_invitation_use_case(
        self,
        invitation_service: InvitationService,
        deep_link_router: DeepLinkRouter,
        clock: Clock,
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(
            invitation_service=invitation_service,
            deep_link_router=deep_link_router,
            clock=clock,
        )

    @provide
    def get_mark_delivered_use_case(
        self, invitation_service: InvitationService
    ) -> MarkDeliveredUseCase:
        """Provide mark delivered use case."""
        return MarkDeliveredUseCase(invitation_service=invitation_service)

    @provide
    def get_analytics_use_case(
        self, analytics_aggregator: AnalyticsAggregator
    ) -> GetAnalyticsUseCase:
        """Provide analytics use case."""
        return GetAnalyticsUseCase(analytics_aggregator=analytics_aggregator)

    # Deep link use cases
    @provide
    def get_handle_deep_link_use_case(
        self, deep_link_router: DeepLinkRouter
    ) -> HandleDeepLinkUseCase:
        """Provide handle deep link use case."""
        return HandleDeepLinkUseCase(deep_link_router=deep_link_router)

    @provide
    def get_process_pending_invitation_use_case(
        self, deep_link_router: DeepLinkRouter
    ) -> ProcessPendingInvitationUseCase:
        """Provide process pending invitation use case."""
        return ProcessPendingInvitationUseCase(deep_link_router=deep_link_router)

    @provide
    def get_pending_invitation_use_case(
        self, deep_link_router: DeepLinkRouter
    ) -> GetPendingInvitationUseCase:
        """Provide pending invitation status use case."""
        return GetPendingInvitationUseCase(deep_link_router=deep_link_router)

    @provide
    def get_clear_pending_invitation_use_case(
        self, deep_link_router: DeepLinkRouter
    ) -> ClearPendingInvitationUseCase:
        """Provide clear pending invitation use case."""
        return ClearPendingInvitationUseCase(deep_link_router=deep_link_router)
