import asyncio

from sqlalchemy import text

from lexora.infrastructure.database import async_session_factory


async def clear_data():
    async with async_session_factory() as session:
        await session.execute(text("DELETE FROM summaries"))
        # Keep built-in templates, only clear user-created ones
        await session.execute(text("DELETE FROM prompt_templates WHERE owner_id IS NOT NULL"))
        await session.commit()
        print("Database cleared! Default prompt templates preserved.")


asyncio.run(clear_data())
