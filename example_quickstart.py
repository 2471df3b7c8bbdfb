"""
SwarmNode Quick Start Example

A short tour of the SwarmNode client.

Features covered:
- Traversing paginated lists
- Manual page-by-page navigation
- Creating an agent and waiting for its build
- Streaming the executions of a cron job

Run with: SWARMNODE_API_KEY=... python example_quickstart.py
"""

import asyncio
from contextlib import aclosing

from swarmnode import SwarmNode, SwarmNodeError


# ============================================================================
# 1. PAGINATION
# ============================================================================


async def pagination_demo(client: SwarmNode):
    """Walk the store list three different ways."""

    # ====== ASYNC ITERATION ======
    print("1️⃣  Iterating every store across all pages")
    stores = await client.stores.list()
    async for store in stores:
        print(f"   Store: {store.name}")

    # ====== MANUAL NAVIGATION ======
    print("\n2️⃣  Walking the pages by hand")
    page = await client.stores.list()
    while True:
        items = page.get_items()
        print(f"   Page {page.get_current_page_number()} - {len(items)} stores")
        if not page.has_next_page():
            break
        page = await page.get_next_page()

    # ====== SPECIFIC PAGE ======
    print("\n3️⃣  Fetching page 2 directly")
    try:
        second = await client.stores.list(page=2)
        print(f"   Items on page 2: {len(second.get_items())}")
    except SwarmNodeError as e:
        print(f"   Page 2 is out of range: {e}")


# ============================================================================
# 2. CRON STREAMING
# ============================================================================


async def cron_streaming_demo(client: SwarmNode):
    """Schedule an agent every minute and print its first result."""

    print("\n4️⃣  Creating a store and an agent")
    store = await client.stores.create(name="cron-store")
    agent = await client.agents.create(
        name="cron-agent",
        script="def main(request, store):\n    return 'hello world'\n",
        python_version="3.12",
        store_id=store.id,
    )
    print(f"   Created agent: {agent.name} (ID: {agent.id})")

    print("   Waiting for the build...")
    await client.wait_for_build_completion(agent.id)
    print("   ✅ Build completed")

    print("\n5️⃣  Scheduling and streaming executions")
    cron_job = await client.agent_executor_cron_jobs.create(
        name="cron-job",
        expression="* * * * *",
        agent_id=agent.id,
    )
    async with aclosing(cron_job.stream()) as executions:
        async for execution in executions:
            if execution.return_value is not None:
                print(f"   Execution result: {execution.return_value}")
                break

    # ====== CLEANUP ======
    await client.agent_executor_cron_jobs.remove(cron_job.id)
    await client.agents.remove(agent.id)
    await client.stores.remove(store.id)
    print("   🧹 Cleaned up")


async def main():
    """Run the quickstart example."""
    async with SwarmNode() as client:
        await pagination_demo(client)
        await cron_streaming_demo(client)


if __name__ == "__main__":
    asyncio.run(main())
