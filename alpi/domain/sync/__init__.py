"""
Sync domain module
"""
from .models import SyncTarget, SyncResult, SyncOutcome, TextBlock
from .mirror_sync import sync_mirror, is_mirror
from .file_deploy import deploy_file, deploy_tree, deploy_scripts
from .block_sync import upsert_text_block, upsert_block_text, count_blocks, strip_block

__all__ = [
    "SyncTarget",
    "SyncResult",
    "SyncOutcome",
    "TextBlock",
    "sync_mirror",
    "is_mirror",
    "deploy_file",
    "deploy_tree",
    "deploy_scripts",
    "upsert_text_block",
    "upsert_block_text",
    "count_blocks",
    "strip_block",
]
