"""
Identity generation service.

Drives both key generators and the assembler. The synchronous entry points
block the calling thread; ``generate_identity_async`` runs the DSA2 and
ElGamal branches on worker threads so they overlap.
"""

import asyncio

import structlog

from pgp_keygen.config import KeyGenConfig
from pgp_keygen.core.passphrase import Passphrase
from pgp_keygen.core.random_source import GenerationContext
from pgp_keygen.crypto.dsa2 import (
    dsa2_parameter_spec,
    generate_dsa2_key_pair,
    select_dsa2_parameters,
)
from pgp_keygen.crypto.elgamal import build_elgamal_parameters, generate_elgamal_key_pair
from pgp_keygen.models.identity import AlgorithmPreferences, IdentityBundle, IdentityRequest
from pgp_keygen.models.keys import Dsa2KeyPair, ElGamalKeyPair
from pgp_keygen.services.assembler import KeyPairAssembler

logger = structlog.get_logger(__name__)


class IdentityService:
    """
    Generates complete DSA2 + ElGamal identities.

    Each generation branch gets its own GenerationContext, so concurrent requests
    never share a random source.

    Example:
        ```python
        service = IdentityService()
        request = IdentityRequest(
            identity="Alice <alice@example.com>",
            passphrase=Passphrase("correct horse"),
            key_size=2048,
            cipher="aes256",
            armor=True,
        )
        bundle = await service.generate_identity_async(request)
        ```

    A caller that needs a deadline can wrap the coroutine in ``asyncio.wait_for``;
    the worker threads still run the search to completion and their result is
    discarded.
    """

    def __init__(
        self,
        config: KeyGenConfig | None = None,
        assembler: KeyPairAssembler | None = None,
    ) -> None:
        """
        Args:
            config: Generation limits and defaults.
            assembler: Bundle assembler. Defaults to one built from ``config``.
        """
        self._config = config or KeyGenConfig()
        self._assembler = assembler if assembler is not None else KeyPairAssembler(self._config)

    def generate_dsa2_key_pair(
        self, key_size: int, context: GenerationContext | None = None
    ) -> Dsa2KeyPair:
        """
        Generate a DSA2 key pair, including its domain parameters.

        Raises:
            InvalidParameterError: If ``key_size`` is not 1024, 2048 or 3072.
            GenerationFailedError: If the parameter search fails.
        """
        context = context if context is not None else self._new_context()
        parameters = select_dsa2_parameters(key_size, context)
        return generate_dsa2_key_pair(parameters)

    def generate_elgamal_key_pair(
        self, key_size: int, context: GenerationContext | None = None
    ) -> ElGamalKeyPair:
        """
        Generate an ElGamal key pair over the tabulated group for ``key_size``.

        Raises:
            InvalidParameterError: If ``key_size`` is not 1024, 2048, 3072 or 4096.
        """
        parameters = build_elgamal_parameters(key_size)
        context = context if context is not None else self._new_context()
        return generate_elgamal_key_pair(parameters, context)

    def generate_identity(self, request: IdentityRequest) -> IdentityBundle:
        """
        Generate both key pairs one after the other and assemble the identity.

        Raises:
            InvalidParameterError: If the request is invalid. Raised before any generation.
            GenerationFailedError: If either key pair could not be generated.
        """
        preferences = self._validate(request)
        logger.info("Generating identity", key_size=request.key_size, concurrent=False)
        dsa2_key_pair = self.generate_dsa2_key_pair(request.key_size)
        elgamal_key_pair = self.generate_elgamal_key_pair(request.resolved_elgamal_key_size)
        return self._assemble(request, preferences, dsa2_key_pair, elgamal_key_pair)

    async def generate_identity_async(self, request: IdentityRequest) -> IdentityBundle:
        """
        Generate both key pairs concurrently on worker threads and assemble the identity.

        Raises:
            InvalidParameterError: If the request is invalid. Raised before any generation.
            GenerationFailedError: If either key pair could not be generated.
        """
        preferences = self._validate(request)
        logger.info("Generating identity", key_size=request.key_size, concurrent=True)
        dsa2_key_pair, elgamal_key_pair = await asyncio.gather(
            asyncio.to_thread(self.generate_dsa2_key_pair, request.key_size, self._new_context()),
            asyncio.to_thread(
                self.generate_elgamal_key_pair,
                request.resolved_elgamal_key_size,
                self._new_context(),
            ),
        )
        return self._assemble(request, preferences, dsa2_key_pair, elgamal_key_pair)

    def _validate(self, request: IdentityRequest) -> AlgorithmPreferences:
        dsa2_parameter_spec(request.key_size)
        build_elgamal_parameters(request.resolved_elgamal_key_size)
        self._assembler.validate_identity(request.identity)
        self._assembler.validate_cipher_choice(request.cipher)
        return self._assembler.resolve_preferences(
            request.preferred_hash_algorithms,
            request.preferred_symmetric_algorithms,
            request.preferred_compression_algorithms,
        )

    def _assemble(
        self,
        request: IdentityRequest,
        preferences: AlgorithmPreferences,
        dsa2_key_pair: Dsa2KeyPair,
        elgamal_key_pair: ElGamalKeyPair,
    ) -> IdentityBundle:
        return self._assembler.assemble_identity(
            dsa2_key_pair,
            elgamal_key_pair,
            request.cipher,
            request.identity,
            Passphrase.coerce(request.passphrase),
            request.armor,
            preferences.hashes,
            preferences.ciphers,
            preferences.compression,
        )

    def _new_context(self) -> GenerationContext:
        return GenerationContext.create(self._config)
