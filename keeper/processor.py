# keeper/processor.py

import os
import json
import asyncio
from pprint import pformat
from typing import List, Tuple

from config import (
    MINTS_QUEUE_NAME,
    FLEEK_METADATA_FOLDER,
    FLEEK_ASSETS_FOLDER,
    RESOURCES_METADATA_FOLDER,
    RESOURCES_ASSETS_FOLDER,
    TOKEN_NAME_TEMPLATE,
    EXTERNAL_URL_TEMPLATE,
)
from keeper.constants import JobName
from keeper.jobs import Job


class InvalidJobError(Exception):
    pass


class KeeperContext:
    def __init__(self, ethernauts, queue, fleek,
                 metadata_folder: str = RESOURCES_METADATA_FOLDER,
                 assets_folder: str = RESOURCES_ASSETS_FOLDER):
        self.ethernauts = ethernauts
        self.queue = queue
        self.fleek = fleek
        self.metadata_folder = metadata_folder
        self.assets_folder = assets_folder


def batch_assignments(batch_number: int, batch_size: int, random_number: int) -> List[Tuple[int, int]]:
    """
    Pairs every token id of the batch with an asset id, shifting the whole
    batch cyclically by ``random_number % batch_size``.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    offset = random_number % batch_size
    min_token_id = batch_size * batch_number
    max_token_id = batch_size * (batch_number + 1) - 1

    assignments = []
    for token_id in range(min_token_id, max_token_id + 1):
        asset_id = token_id + offset
        if asset_id > max_token_id:
            asset_id -= batch_size
        assignments.append((token_id, asset_id))
    return assignments


def normalize_base_uri(folder_hash: str) -> str:
    base_uri = folder_hash
    if not base_uri.startswith("ipfs://"):
        base_uri = f"ipfs://{base_uri}"
    if not base_uri.endswith("/"):
        base_uri += "/"
    return base_uri


async def process_batch(data: dict, ctx: KeeperContext) -> dict:
    """Generate all the jobs needed to upload the assets of one batch."""
    batch_number = int(data["batch_number"])
    batch_size = int(data["batch_size"])

    random_number = ctx.ethernauts.get_random_number_for_batch(batch_number)
    assignments = batch_assignments(batch_number, batch_size, random_number)

    children = [
        Job(JobName.UPLOAD_RESOURCE, {"token_id": token_id, "asset_id": asset_id}, MINTS_QUEUE_NAME)
        for token_id, asset_id in assignments
    ]
    ctx.queue.add(Job(JobName.UPDATE_BASE_URL, {}, MINTS_QUEUE_NAME, children=children))

    return {
        "batch_number": batch_number,
        "min_token_id_in_batch": assignments[0][0],
        "max_token_id_in_batch": assignments[-1][0],
    }


async def update_base_url(data: dict, ctx: KeeperContext) -> str:
    """Point the contract base URI at the latest metadata folder on IPFS."""
    folder_hash = ctx.fleek.get_folder_hash(FLEEK_METADATA_FOLDER)
    base_uri = normalize_base_uri(folder_hash)

    tx = ctx.ethernauts.set_base_uri(base_uri)
    tx.wait()

    return base_uri


async def upload_resource(data: dict, ctx: KeeperContext) -> dict | None:
    """Upload the metadata and image of one token, unless already uploaded."""
    token_id = int(data["token_id"])
    asset_id = int(data["asset_id"])

    metadata_key = f"{FLEEK_METADATA_FOLDER}/{token_id}"
    asset_key = f"{FLEEK_ASSETS_FOLDER}/{token_id}.png"

    if ctx.fleek.file_exists(metadata_key):
        print(f'[Upload ⚠️] Resource with tokenId "{token_id}" already uploaded')
        return None

    metadata_path = os.path.join(ctx.metadata_folder, f"{asset_id}.json")
    asset_path = os.path.join(ctx.assets_folder, f"{asset_id}.png")

    with open(metadata_path, "r", encoding="utf-8") as f:
        metadata = json.load(f)
    metadata["name"] = TOKEN_NAME_TEMPLATE.format(token_id=token_id)
    metadata["external_url"] = EXTERNAL_URL_TEMPLATE.format(token_id=token_id)
    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2, ensure_ascii=False)

    metadata_result, asset_result = await asyncio.gather(
        asyncio.to_thread(ctx.fleek.upload_file, metadata_key, metadata_path),
        asyncio.to_thread(ctx.fleek.upload_file, asset_key, asset_path),
    )

    return {
        "token_id": token_id,
        "asset_id": asset_id,
        "metadata": metadata_result,
        "asset": asset_result,
    }


async def run_job(job: Job, ctx: KeeperContext):
    try:
        name = JobName(job.name)
    except ValueError:
        raise InvalidJobError(f"Invalid job: {json.dumps(job.as_dict(), default=str)}") from None

    match name:
        case JobName.PROCESS_BATCH:
            return await process_batch(job.data, ctx)
        case JobName.UPDATE_BASE_URL:
            return await update_base_url(job.data, ctx)
        case JobName.UPLOAD_RESOURCE:
            return await upload_resource(job.data, ctx)


def process_jobs(ctx: KeeperContext):
    async def process_job(job: Job):
        result = await run_job(job, ctx)
        print(f"[Job ✅] Completed: {pformat(result)}")
        return result

    return process_job
