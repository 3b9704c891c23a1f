import asyncio

from config import MINTS_QUEUE_NAME, NETWORK, RPC
from keeper.constants import JobName
from keeper.contract import load_ethernauts
from keeper.fleek import FleekClient
from keeper.jobs import Job
from keeper.processor import KeeperContext, process_jobs
from keeper.queue import JobQueue


def build_context() -> KeeperContext:
    print(f"🔌 Network: {NETWORK} ({RPC})")
    return KeeperContext(
        ethernauts=load_ethernauts(),
        queue=JobQueue(MINTS_QUEUE_NAME),
        fleek=FleekClient(),
    )


def ask_int(prompt: str) -> int | None:
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        print("❌ Expected a number")
        return None


async def run_queue(ctx: KeeperContext, process_job):
    processed = await ctx.queue.run(process_job)
    print(f"📦 Processed {processed} job(s): {len(ctx.queue.completed)} completed, {len(ctx.queue.failed)} failed")


async def main():
    ctx = build_context()
    process_job = process_jobs(ctx)

    while True:
        print("\n=== Ethernauts keeper ===")
        print("1. 🎲 Queue batch")
        print("2. 🔗 Queue base URI update")
        print("3. 🖼️ Queue single resource upload")
        print("4. ▶️ Drain queue")
        print("5. 📊 Queue status")
        print("0. 🚪 Exit")

        choice = input("Choose an option: ").strip()

        if choice == "0":
            print("👋 Bye!")
            break

        elif choice == "1":
            batch_number = ask_int("Batch number: ")
            batch_size = ask_int("Batch size: ")
            if batch_number is None or batch_size is None:
                continue
            ctx.queue.add(Job(JobName.PROCESS_BATCH, {"batch_number": batch_number, "batch_size": batch_size}))
            print("📥 Batch job queued")

        elif choice == "2":
            ctx.queue.add(Job(JobName.UPDATE_BASE_URL))
            print("📥 Base URI job queued")

        elif choice == "3":
            token_id = ask_int("Token id: ")
            asset_id = ask_int("Asset id: ")
            if token_id is None or asset_id is None:
                continue
            ctx.queue.add(Job(JobName.UPLOAD_RESOURCE, {"token_id": token_id, "asset_id": asset_id}))
            print("📥 Upload job queued")

        elif choice == "4":
            await run_queue(ctx, process_job)

        elif choice == "5":
            print(f"⏳ Pending: {len(ctx.queue.pending)}")
            print(f"✅ Completed: {len(ctx.queue.completed)}")
            for job, error in ctx.queue.failed:
                print(f"❌ {job!r} → {error}")

        else:
            print("❌ Invalid option")


if __name__ == "__main__":
    asyncio.run(main())
