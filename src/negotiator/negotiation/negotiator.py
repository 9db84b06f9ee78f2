# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Negotiator — resolves a request URL to its best on-disk variant."""

from __future__ import annotations

import re
from collections.abc import Mapping

import structlog

from negotiator.config.properties.negotiation import NegotiationProperties
from negotiator.core.config import Config
from negotiator.i18n.locale import normalize_locale_id, prioritized_locale_ids
from negotiator.negotiation.catalog import VariantCatalog
from negotiator.negotiation.content_types import ContentTypeRegistry
from negotiator.negotiation.paths import parse_request_url
from negotiator.negotiation.policy import ResponsePolicy
from negotiator.negotiation.ports.outbound import DirectoryWatcher, UserAgentClassifier
from negotiator.negotiation.quality import parse_quality
from negotiator.negotiation.scorer import select_variant
from negotiator.negotiation.types import PASS_THROUGH, NegotiationDecision
from negotiator.negotiation.user_agent import UserAgentTagResolver

logger = structlog.get_logger("negotiator.negotiation")

# Raw substring match on the query string, no full query parsing.
_LOCALE_PARAMETER_RE = re.compile(r"[&?]locale=([^&]+)(?:$|&)")


class Negotiator:
    """Chooses among locale-, content-type- and device-tagged file variants.

    Typical use sits in front of static file serving::

        negotiator = Negotiator(NegotiationProperties(root=["public"], cookie_name="locale"))
        decision = await negotiator.negotiate("/", headers, cookies)
        if not decision.is_pass_through:
            serve(decision.target_url)

    Locale preferences come from (highest first) a locale in the requested
    file name, a ``locale=`` query parameter, the configured cookie, the
    ``Accept-Language`` header and finally the default locales.
    """

    def __init__(
        self,
        properties: NegotiationProperties,
        *,
        classifier: UserAgentClassifier | None = None,
        watcher: DirectoryWatcher | None = None,
    ) -> None:
        properties.validate()
        self._properties = properties
        if properties.watch and watcher is None:
            from negotiator.negotiation.adapters.watchfiles_watcher import WatchfilesDirectoryWatcher

            watcher = WatchfilesDirectoryWatcher()
        self._watcher = watcher if properties.watch else None
        self._catalog = VariantCatalog(
            properties.root,
            content_types=ContentTypeRegistry(properties.content_types),
            user_agent=properties.user_agent,
            watcher=self._watcher,
        )
        self._policy = ResponsePolicy(user_agent=properties.user_agent)
        self._user_agents = UserAgentTagResolver(classifier) if properties.user_agent else None
        self._default_locale_ids = tuple(normalize_locale_id(locale_id) for locale_id in properties.default_locales)

    @classmethod
    def from_config(cls, config: Config, **kwargs: object) -> Negotiator:
        """Build a negotiator from the ``negotiator.*`` configuration section."""
        return cls(config.bind(NegotiationProperties), **kwargs)  # type: ignore[arg-type]

    @property
    def properties(self) -> NegotiationProperties:
        return self._properties

    @property
    def catalog(self) -> VariantCatalog:
        return self._catalog

    async def negotiate(
        self,
        url: str,
        headers: Mapping[str, str],
        cookies: Mapping[str, str] | None = None,
    ) -> NegotiationDecision:
        """Decide whether *url* should be rewritten to a variant.

        *headers* may use any key case.  Filesystem errors other than a
        missing directory propagate as ``InfrastructureException``.
        """
        request = parse_request_url(url)
        if request is None:
            logger.debug("variant_pass_through", url=url, reason="unparseable")
            return PASS_THROUGH

        lowered = {name.lower(): value for name, value in headers.items()}
        request_info = self._catalog.classify(request.extensions)

        cookie_value = None
        if self._properties.cookie_name and cookies:
            cookie_value = cookies.get(self._properties.cookie_name)
        match = _LOCALE_PARAMETER_RE.search(request.query)
        locale_ids = prioritized_locale_ids(
            request_info.locale_id,
            match.group(1) if match else None,
            cookie_value,
            lowered.get("accept-language"),
            self._default_locale_ids,
        )

        accept = lowered.get("accept")
        accept_tokens = parse_quality(accept) if accept else None
        user_agent = lowered.get("user-agent")
        requester_tags = self._user_agents.resolve(user_agent) if self._user_agents and user_agent else None

        groups = await self._catalog.get(request.directory)
        variants = groups.get(request.base_name)
        if not variants:
            logger.debug("variant_pass_through", url=url, reason="no_variants")
            return PASS_THROUGH

        selection = select_variant(
            request.file_name,
            variants,
            locale_ids,
            pinned_content_type=request_info.content_type,
            accept_tokens=accept_tokens,
            requester_tags=requester_tags,
        )
        if selection is None:
            logger.debug("variant_pass_through", url=url, reason="no_candidate")
            return PASS_THROUGH

        decision = await self._policy.decide(request, request_info, selection.variant)
        logger.debug(
            "variant_negotiated",
            url=url,
            target=decision.target_url,
            locale=selection.locale_id,
            score=selection.score,
        )
        return decision

    async def close(self) -> None:
        """Stop filesystem watches, if any."""
        if self._watcher is not None:
            await self._watcher.close()
