"""Domain layer DI providers."""

from dishka import Scope, provide

from twinship.config import DeepLinkSettings, InvitationSettings
from twinship.domain.repository import InvitationRepository, PendingLinkRepository
from twinship.domain.service import (
    AnalyticsAggregator,
    ChannelDispatcher,
    ChannelTransport,
    DeepLinkRouter,
    InvitationService,
    Notifier,
    RateLimiter,
    RetryManager,
    TokenGenerator,
)
from twinship.util.clock import Clock
from twinship.util.di.base import ProviderBase
from twinship.util.templates import MessageRenderer


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: one engine per container, so the rate
    limiter and per-invitation locks are shared by every request.
    """

    scope = Scope.APP

    @provide
    def get_token_generator(self) -> TokenGenerator:
        """Provide secure token generator."""
        return TokenGenerator()

    @provide
    def get_rate_limiter(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> RateLimiter:
        """Provide invitation creation rate limiter."""
        return RateLimiter(
            invitation_repository=invitation_repository,
            clock=clock,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        token_generator: TokenGenerator,
        rate_limiter: RateLimiter,
        notifier: Notifier,
        clock: Clock,
        invitation_settings: InvitationSettings,
        deep_link_settings: DeepLinkSettings,
    ) -> InvitationService:
        """Provide invitation lifecycle service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            token_generator=token_generator,
            rate_limiter=rate_limiter,
            notifier=notifier,
            clock=clock,
            invitation_settings=invitation_settings,
            deep_link_settings=deep_link_settings,
        )

    @provide
    def get_message_renderer(self) -> MessageRenderer:
        """Provide invitation message renderer."""
        return MessageRenderer()

    @provide
    def get_channel_dispatcher(
        self,
        invitation_service: InvitationService,
        transport: ChannelTransport,
        renderer: MessageRenderer,
    ) -> ChannelDispatcher:
        """Provide channel dispatcher."""
        return ChannelDispatcher(
            invitation_service=invitation_service,
            transport=transport,
            renderer=renderer,
        )

    @provide
    def get_retry_manager(
        self,
        invitation_service: InvitationService,
        dispatcher: ChannelDispatcher,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> RetryManager:
        """Provide retry manager."""
        return RetryManager(
            invitation_service=invitation_service,
            dispatcher=dispatcher,
            clock=clock,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_deep_link_router(
        self,
        pending_link_repository: PendingLinkRepository,
        invitation_service: InvitationService,
        clock: Clock,
        deep_link_settings: DeepLinkSettings,
    ) -> DeepLinkRouter:
        """Provide deep link router."""
        return DeepLinkRouter(
            pending_link_repository=pending_link_repository,
            invitation_service=invitation_service,
            clock=clock,
            deep_link_settings=deep_link_settings,
        )

    @provide
    def get_analytics_aggregator(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        invitation_settings: InvitationSettings,
    ) -> AnalyticsAggregator:
        """Provide analytics aggregator."""
        return AnalyticsAggregator(
            invitation_repository=invitation_repository,
            clock=clock,
            invitation_settings=invitation_settings,
        )
