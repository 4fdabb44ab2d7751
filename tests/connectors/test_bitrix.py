"""Tests for BitrixClient."""

import httpx
import pytest

from oraclio.connectors.bitrix import BitrixClient, CRMError, build_method_url, encode_params


WEBHOOK = "https://portal.bitrix24.ru/rest/1/abc123/"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestBuildMethodUrl:
    """SUT: build_method_url"""

    def test_webhook_with_trailing_slash(self):
        assert build_method_url(WEBHOOK, "crm.deal.list") == (
            "https://portal.bitrix24.ru/rest/1/abc123/crm.deal.list/"
        )

    def test_webhook_without_trailing_slash(self):
        assert build_method_url(WEBHOOK.rstrip("/"), "crm.deal.list") == (
            "https://portal.bitrix24.ru/rest/1/abc123/crm.deal.list/"
        )

    def test_adds_scheme_and_strips_spaces(self):
        assert build_method_url(" portal.bitrix24.ru/rest/1/ab c/ ", "app.info") == (
            "https://portal.bitrix24.ru/rest/1/abc/app.info/"
        )

    def test_bare_domain(self):
        assert build_method_url("https://portal.bitrix24.ru", "crm.contact.list") == (
            "https://portal.bitrix24.ru/rest/1/dummy/crm.contact.list/"
        )

    def test_empty_raises(self):
        with pytest.raises(CRMError):
            build_method_url("   ", "crm.deal.list")


class TestEncodeParams:
    """SUT: encode_params"""

    def test_objects_are_json(self):
        assert encode_params({"order": {"ID": "DESC"}, "start": 0, "skip": None}) == {
            "order": '{"ID": "DESC"}',
            "start": "0",
        }


class TestBitrixClient:
    """Tests for BitrixClient."""

    async def test_list_deals_truncates(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json={"result": [{"ID": str(i)} for i in range(60)]})

        async with _client(handler) as http:
            deals = await BitrixClient(http_client=http).list_deals(WEBHOOK, limit=50)

        assert len(deals) == 50
        assert requested == ["https://portal.bitrix24.ru/rest/1/abc123/crm.deal.list/"]

    async def test_list_contacts(self):
        async with _client(lambda r: httpx.Response(200, json={"result": [{"ID": "1"}]})) as http:
            contacts = await BitrixClient(http_client=http).list_contacts(WEBHOOK)
        assert contacts == [{"ID": "1"}]

    async def test_missing_result_is_empty(self):
        async with _client(lambda r: httpx.Response(200, json={"total": 0})) as http:
            assert await BitrixClient(http_client=http).list_deals(WEBHOOK) == []

    async def test_api_error_payload(self):
        payload = {"error": "expired_token", "error_description": "The access token provided has expired."}
        async with _client(lambda r: httpx.Response(200, json=payload)) as http:
            with pytest.raises(CRMError, match="expired"):
                await BitrixClient(http_client=http).list_deals(WEBHOOK)

    async def test_http_error(self):
        async with _client(lambda r: httpx.Response(500)) as http:
            with pytest.raises(CRMError):
                await BitrixClient(http_client=http).list_deals(WEBHOOK)

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        async with _client(handler) as http:
            with pytest.raises(CRMError):
                await BitrixClient(http_client=http).list_deals(WEBHOOK)

    async def test_malformed_json(self):
        async with _client(lambda r: httpx.Response(200, text="not json")) as http:
            with pytest.raises(CRMError):
                await BitrixClient(http_client=http).list_contacts(WEBHOOK)

    async def test_result_not_a_list(self):
        async with _client(lambda r: httpx.Response(200, json={"result": {"ID": "1"}})) as http:
            with pytest.raises(CRMError):
                await BitrixClient(http_client=http).list_deals(WEBHOOK)
