"""End-to-end tests for the REST API over a SQLite database."""

from unittest.mock import AsyncMock

import pytest

from lexora.infrastructure.gmail_client import MailAuthExpired
from lexora.repositories.user_repo import UserRepository
from lexora.services.summarizer import TITLE_INSTRUCTIONS

ALICE = {"Authorization": "Bearer alice-session-token"}
BOB = {"Authorization": "Bearer bob-session-token"}


def _llm_responses(fake_llm, title="Weekly Sync", summary="- Ship v2", title_error=None, summary_error=None):
    async def complete(model, instructions, prompt):
        if instructions == TITLE_INSTRUCTIONS:
            if title_error:
                raise title_error
            return title
        if summary_error:
            raise summary_error
        return summary

    fake_llm.complete.side_effect = complete


async def _summarize(client, transcript="Alice: ship v2 Friday", prompt="List action items"):
    return await client.post(
        "/api/summarize",
        data={"prompt": prompt, "transcript": transcript},
        headers=ALICE,
    )


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_history_requires_token(self, client):
        response = await client.get("/api/summaries")
        assert response.status_code == 401
        assert response.json() == {"error": "You must log in."}

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, client, alice):
        response = await client.get("/api/summaries", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401


class TestSummarize:
    @pytest.mark.asyncio
    async def test_pasted_transcript_creates_record(self, client, alice, fake_llm):
        _llm_responses(fake_llm)

        response = await _summarize(client)

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Weekly Sync"
        assert body["summaryText"] == "- Ship v2"
        assert body["originalContent"] == "Alice: ship v2 Friday"
        assert body["prompt"] == "List action items"
        assert body["ownerId"] == alice.id
        assert body["shareId"]

        history = (await client.get("/api/summaries", headers=ALICE)).json()
        assert [s["id"] for s in history] == [body["id"]]

    @pytest.mark.asyncio
    async def test_each_request_gets_a_new_share_id(self, client, alice, fake_llm):
        _llm_responses(fake_llm)

        first = (await _summarize(client)).json()
        second = (await _summarize(client)).json()

        assert first["shareId"] != second["shareId"]

    @pytest.mark.asyncio
    async def test_uploaded_text_file(self, client, alice, fake_llm):
        _llm_responses(fake_llm)

        response = await client.post(
            "/api/summarize",
            data={"prompt": "Summarize"},
            files={"file": ("notes.txt", b"Bob: budget approved", "text/plain")},
            headers=ALICE,
        )

        assert response.status_code == 200
        assert response.json()["originalContent"] == "Bob: budget approved"

    @pytest.mark.asyncio
    async def test_unsupported_upload_rejected_before_ai(self, client, alice, fake_llm):
        response = await client.post(
            "/api/summarize",
            data={"prompt": "Summarize"},
            files={"file": ("slides.pdf", b"%PDF-1.7", "application/pdf")},
            headers=ALICE,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported file type."}
        fake_llm.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_prompt(self, client, alice, fake_llm):
        response = await _summarize(client, prompt="")

        assert response.status_code == 400
        assert response.json() == {"error": "Transcript and prompt are required."}
        fake_llm.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_title_failure_still_succeeds(self, client, alice, fake_llm):
        _llm_responses(fake_llm, title_error=RuntimeError("title model down"))

        response = await _summarize(client)

        assert response.status_code == 200
        assert response.json()["title"] == "Untitled Summary"

    @pytest.mark.asyncio
    async def test_summary_failure_persists_nothing(self, client, alice, fake_llm):
        _llm_responses(fake_llm, summary_error=RuntimeError("summary model down"))

        response = await _summarize(client)

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to generate summary."}
        assert (await client.get("/api/summaries", headers=ALICE)).json() == []


class TestPublicRead:
    @pytest.mark.asyncio
    async def test_shared_summary_readable_without_auth(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.get(f"/api/summaries/{created['shareId']}")

        assert response.status_code == 200
        assert response.json()["summaryText"] == "- Ship v2"

    @pytest.mark.asyncio
    async def test_unknown_share_id_is_404(self, client):
        response = await client.get("/api/summaries/doesnotexist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_share_page_renders_html(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.get(f"/summary/{created['shareId']}")

        assert response.status_code == 200
        assert "Weekly Sync" in response.text
        assert "- Ship v2" in response.text

    @pytest.mark.asyncio
    async def test_share_page_unknown_is_404(self, client):
        response = await client.get("/summary/doesnotexist")
        assert response.status_code == 404
        assert "Summary not found" in response.text


class TestOwnerMutations:
    @pytest.mark.asyncio
    async def test_owner_renames(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.patch(
            f"/api/summaries/{created['id']}", json={"title": "Budget Review"}, headers=ALICE
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Budget Review"

    @pytest.mark.asyncio
    async def test_other_user_cannot_rename(self, client, alice, bob, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.patch(
            f"/api/summaries/{created['id']}", json={"title": "Hijacked"}, headers=BOB
        )

        assert response.status_code == 404
        public = (await client.get(f"/api/summaries/{created['shareId']}")).json()
        assert public["title"] == "Weekly Sync"

    @pytest.mark.asyncio
    async def test_rename_requires_title(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.patch(f"/api/summaries/{created['id']}", json={}, headers=ALICE)

        assert response.status_code == 400
        assert response.json() == {"error": "Title is required."}

    @pytest.mark.asyncio
    async def test_rename_rejects_overlong_title(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        response = await client.patch(
            f"/api/summaries/{created['id']}", json={"title": "x" * 301}, headers=ALICE
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Title must be at most 300 characters."}

    @pytest.mark.asyncio
    async def test_save_refined_text(self, client, alice, bob, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()

        denied = await client.patch(
            f"/api/summaries/{created['id']}/text", json={"summaryText": "x"}, headers=BOB
        )
        saved = await client.patch(
            f"/api/summaries/{created['id']}/text",
            json={"summaryText": "Refined"},
            headers=ALICE,
        )

        assert denied.status_code == 404
        assert saved.status_code == 200
        assert saved.json()["summaryText"] == "Refined"
        assert saved.json()["prompt"] == "List action items"


class TestRefine:
    @pytest.mark.asyncio
    async def test_refine_does_not_persist(self, client, alice, fake_llm):
        _llm_responses(fake_llm)
        created = (await _summarize(client)).json()
        fake_llm.complete.side_effect = None
        fake_llm.complete.return_value = "Shorter"

        response = await client.post(
            "/api/summaries/refine",
            json={"currentSummary": "- Ship v2", "refinementPrompt": "Make it shorter"},
            headers=ALICE,
        )

        assert response.json() == {"refinedText": "Shorter"}
        public = (await client.get(f"/api/summaries/{created['shareId']}")).json()
        assert public["summaryText"] == "- Ship v2"

    @pytest.mark.asyncio
    async def test_refine_failure(self, client, alice, fake_llm):
        fake_llm.complete.side_effect = RuntimeError("down")

        response = await client.post(
            "/api/summaries/refine",
            json={"currentSummary": "text", "refinementPrompt": "shorter"},
            headers=ALICE,
        )

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to refine summary."}


class TestShare:
    @pytest.mark.asyncio
    async def test_sends_from_users_mailbox(self, client, alice, fake_mailer):
        response = await client.post(
            "/api/share",
            json={"summary": "- Ship v2", "recipient": "carol@example.com"},
            headers=ALICE,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Email sent successfully!"}
        kwargs = fake_mailer.send.await_args.kwargs
        assert kwargs["access_token"] == "alice-google-token"
        assert kwargs["sender"] == "alice@example.com"
        assert kwargs["recipient"] == "carol@example.com"
        assert kwargs["body"] == "- Ship v2"

    @pytest.mark.asyncio
    async def test_recipient_required(self, client, alice, fake_mailer):
        response = await client.post("/api/share", json={"summary": "text"}, headers=ALICE)

        assert response.status_code == 400
        fake_mailer.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_mail_token_is_renewed_and_stored(
        self, client, test_session, session_factory, fake_mailer
    ):
        await UserRepository(test_session).upsert_from_identity(
            email="erin@example.com",
            session_token="erin-session-token",
            google_access_token="expired-token",
            google_refresh_token="erin-refresh-token",
        )
        await test_session.commit()
        fake_mailer.send.side_effect = [MailAuthExpired("HTTP 401"), "gmail-message-id"]
        fake_mailer.refresh_access_token = AsyncMock(return_value="fresh-token")

        response = await client.post(
            "/api/share",
            json={"summary": "- Ship v2", "recipient": "carol@example.com"},
            headers={"Authorization": "Bearer erin-session-token"},
        )

        assert response.status_code == 200
        fake_mailer.refresh_access_token.assert_awaited_once_with("erin-refresh-token")
        async with session_factory() as session:
            user = await UserRepository(session).get_by_session_token("erin-session-token")
        assert user.google_access_token == "fresh-token"


class TestPrompts:
    @pytest.mark.asyncio
    async def test_create_list_delete(self, client, alice, bob):
        created = await client.post(
            "/api/prompts",
            json={"title": "Risks", "promptText": "List the risks raised."},
            headers=ALICE,
        )
        assert created.status_code == 201
        prompt_id = created.json()["id"]

        alice_titles = [p["title"] for p in (await client.get("/api/prompts", headers=ALICE)).json()]
        bob_titles = [p["title"] for p in (await client.get("/api/prompts", headers=BOB)).json()]
        assert "Risks" in alice_titles
        assert "Risks" not in bob_titles

        assert (await client.delete(f"/api/prompts/{prompt_id}", headers=BOB)).status_code == 404
        deleted = await client.delete(f"/api/prompts/{prompt_id}", headers=ALICE)
        assert deleted.json() == {"message": "Prompt deleted."}

    @pytest.mark.asyncio
    async def test_create_requires_fields(self, client, alice):
        response = await client.post("/api/prompts", json={"title": "Empty"}, headers=ALICE)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_rejects_overlong_title(self, client, alice):
        response = await client.post(
            "/api/prompts",
            json={"title": "x" * 201, "promptText": "List the risks raised."},
            headers=ALICE,
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Title must be at most 200 characters."}
