"""
Unit tests for registration token issuance.
"""
import re
import pytest
from unittest.mock import Mock, patch

from src.registration_token.token_generator import (
    TokenIssuer, generate_random_string, generate_unique_token
)
from src.utils.errors import StoreUnavailable, TokenGenerationExhausted

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]*$")


class TestGenerateRandomString:
    """Test cases for the random candidate generator."""

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 8, 12, 13, 32, 100])
    def test_exact_length_and_alphabet(self, length):
        token = generate_random_string(length)

        assert len(token) == length
        assert URL_SAFE.match(token)

    def test_no_padding_characters(self):
        for length in range(1, 20):
            assert "=" not in generate_random_string(length)

    def test_candidates_differ(self):
        tokens = {generate_random_string(12) for _ in range(50)}
        assert len(tokens) == 50

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            generate_random_string(length)


class TestTokenIssuer:
    """Test cases for TokenIssuer."""

    @pytest.fixture
    def token_store(self):
        store = Mock()
        store.token_exists.return_value = False
        return store

    @pytest.fixture
    def generator(self):
        gen = Mock(side_effect=lambda length: "c" * length)
        return gen

    @pytest.fixture
    def issuer(self, token_store, generator):
        return TokenIssuer(token_store, generator=generator, logger=Mock())

    def test_empty_store_returns_first_candidate(self, token_store):
        issuer = TokenIssuer(token_store, logger=Mock())

        token = issuer.generate_unique_token(length=12, max_retries=5)

        assert len(token) == 12
        assert URL_SAFE.match(token)
        token_store.token_exists.assert_called_once_with(token)

    def test_defaults_are_twelve_chars_five_attempts(self, token_store, generator):
        token_store.token_exists.return_value = True
        issuer = TokenIssuer(token_store, generator=generator, logger=Mock())

        with pytest.raises(TokenGenerationExhausted):
            issuer.generate_unique_token()

        assert generator.call_count == 5
        generator.assert_called_with(12)

    def test_returns_candidate_after_collisions(self, token_store):
        candidates = ["AAAAAAAA", "BBBBBBBB", "CCCCCCCC"]
        generator = Mock(side_effect=candidates)
        token_store.token_exists.side_effect = [True, True, False]
        issuer = TokenIssuer(token_store, generator=generator, logger=Mock())

        token = issuer.generate_unique_token(length=8, max_retries=3)

        assert token == "CCCCCCCC"
        assert generator.call_count == 3
        assert token_store.token_exists.call_count == 3
        assert [c.args[0] for c in token_store.token_exists.call_args_list] == candidates

    @pytest.mark.parametrize("collisions,max_retries", [(0, 1), (1, 5), (3, 4), (4, 5)])
    def test_stops_at_first_unique_candidate(self, token_store, generator, collisions, max_retries):
        token_store.token_exists.side_effect = [True] * collisions + [False]
        issuer = TokenIssuer(token_store, generator=generator, logger=Mock())

        issuer.generate_unique_token(length=6, max_retries=max_retries)

        assert generator.call_count == collisions + 1
        assert token_store.token_exists.call_count == collisions + 1

    def test_exhausted_after_all_collisions(self, token_store, generator):
        token_store.token_exists.return_value = True
        issuer = TokenIssuer(token_store, generator=generator, logger=Mock())

        with pytest.raises(TokenGenerationExhausted) as exc_info:
            issuer.generate_unique_token(length=8, max_retries=2)

        assert generator.call_count == 2
        assert token_store.token_exists.call_count == 2
        assert exc_info.value.details == {"max_retries": 2, "length": 8}
        assert exc_info.value.retryable is True

    @pytest.mark.parametrize("failing_attempt", [1, 2, 3])
    def test_store_failure_aborts_immediately(self, token_store, generator, failing_attempt):
        token_store.token_exists.side_effect = (
            [True] * (failing_attempt - 1) + [StoreUnavailable("down")]
        )
        issuer = TokenIssuer(token_store, generator=generator, logger=Mock())

        with pytest.raises(StoreUnavailable):
            issuer.generate_unique_token(length=8, max_retries=5)

        assert generator.call_count == failing_attempt
        assert token_store.token_exists.call_count == failing_attempt

    def test_collisions_are_logged(self, token_store, generator):
        logger = Mock()
        token_store.token_exists.side_effect = [True, False]
        issuer = TokenIssuer(token_store, generator=generator, logger=logger)

        issuer.generate_unique_token(length=8, max_retries=3)

        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["attempt"] == 1
        logger.info.assert_called_once()

    @pytest.mark.parametrize("length,max_retries", [(0, 5), (-3, 5), (12, 0), (12, -1)])
    def test_invalid_arguments(self, issuer, token_store, length, max_retries):
        with pytest.raises(ValueError):
            issuer.generate_unique_token(length=length, max_retries=max_retries)

        token_store.token_exists.assert_not_called()


class TestGenerateUniqueToken:
    """Test cases for the module-level helper."""

    def test_uses_store(self):
        store = Mock()
        store.token_exists.return_value = False

        with patch('src.registration_token.token_generator.get_logger'):
            token = generate_unique_token(store, length=16, max_retries=2)

        assert len(token) == 16
        store.token_exists.assert_called_once_with(token)
