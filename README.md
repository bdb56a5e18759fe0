# kaiki

Building blocks for visual regression testing workflows. This package does not compare
images itself. It handles the work around a comparison: recording the result, naming
where reports are stored, choosing storage keys from git history, and sending
notifications.

## Modules

- `kaiki.report`
  - `ComparisonResult` holds the lists of failed, new, deleted, passed, expected, actual
    and diff items, plus the three directory names.
  - `has_failures()` and `has_changes()` summarise a result.
  - `to_dict()` / `from_dict()` and `to_json()` / `from_json()` convert to and from the
    camelCase JSON form (`failedItems`, `diffDir`, ...). Malformed input raises
    `ReportError`.
  - `is_passed(diff_count, total_pixels, threshold_pixel, threshold_rate)` applies the
    thresholds. A pixel threshold wins over a rate threshold. With neither, only zero
    differing pixels passes. A rate check on zero total pixels passes.
  - `write_json_report(result, path)` writes pretty-printed `out.json`.
- `kaiki.storage`
  - `maybe_decompress` gunzips data whose content encoding mentions gzip. If that fails
    it returns the raw bytes.
  - `gzip_compress` compresses data.
  - `guess_content_type` maps a file name to a MIME type, with octet-stream as the
    fallback.
  - `iter_upload_files` yields the files under a directory whose extension is in
    `UPLOAD_EXTENSIONS`.
  - `prepare_uploads(source_dir, build_key)` reads and gzips those files into
    `UploadItem`s. Read failures raise `StorageError`.
  - The module also defines `PublishResult` and `MAX_CONCURRENCY`.
- `kaiki.s3` and `kaiki.gcs`
  - `build_s3_key` / `build_gcs_key` join an optional prefix, a storage key and a
    relative path.
  - `s3_report_url` / `gcs_report_url` give the public `index.html` URL of a report.
  - `S3Location` and `GcsLocation` bundle the bucket settings with `build_key`,
    `report_url` and `uploads(storage_key, source_dir)`.
- `kaiki.keygen`
  - `KeyGenerator` is the abstract interface.
  - `SimpleKeygen` returns one fixed key. Its expected key is `None` when that key is
    empty.
  - `GitHashKeygen(repo_path)` runs the `git` command in the repository.
    - The actual key is the HEAD commit hash.
    - The expected key is the nearest commit in HEAD's first-parent history, looking at
      most 300 commits back, that is the tip of another local branch. It is `None` if
      there is no such commit.
    - A path that is not a directory raises `RepoNotFoundError`.
    - Git failures, such as a repository with no commits, raise `GitError`.
- `kaiki.notify`
  - `NotifyParams` carries the comparison, the commit SHA, an optional report URL and
    an optional pull-request number.
  - Errors are `NotifyError` and its subclasses `NotifyHttpError`, `NotifyFailedError`
    and `NotifyConfigError`.
- `kaiki.github_client`
  - `HttpGitHubClient(token, base_url=...)` is an async client for the GitHub REST API.
    It provides `create_commit_status`, `list_issue_comments` (returning
    `IssueComment`s), `create_issue_comment`, `update_issue_comment` and `aclose`.
  - It can also be used as an async context manager.
  - A transport error raises `NotifyHttpError`.
  - A non-success status raises `NotifyFailedError`, with a message such as
    `commit status failed (500 Internal Server Error): ...`.
- `kaiki.slack`
  - `build_slack_payload(params)` builds a webhook attachment.
    - The colour is `danger` on failures, `warning` on other changes and `good`
      otherwise.
    - It always has a Result field.
    - It has a Report field when a report URL is set.
    - It has an `image_url` for the first failed item when both a report URL and a
      failure exist. `diff_image_url` builds that URL.
  - `SlackNotifier(SlackNotifyConfig(webhook_url=...)).notify(params)` posts the
    payload. When the webhook answers with an error status, it logs a warning instead
    of raising.

## Installation

```
pip install kaiki
```

To install the test dependencies as well:

```
pip install "kaiki[test]"
```

## Example

```python
from pathlib import Path

from kaiki.keygen import GitHashKeygen
from kaiki.notify import NotifyParams
from kaiki.report import ComparisonResult, is_passed, write_json_report
from kaiki.s3 import S3Location
from kaiki.slack import build_slack_payload

keygen = GitHashKeygen(Path("."))
actual_key = keygen.get_actual_key()
expected_key = keygen.get_expected_key()  # None when no fork point is found

result = ComparisonResult(
    failed_items=["a.png"],
    passed_items=["c.png"],
    expected_items=["a.png", "c.png"],
    actual_items=["a.png", "c.png"],
    diff_items=["a.png", "c.png"],
    actual_dir="actual",
    expected_dir="expected",
    diff_dir="diff",
)
write_json_report(result, Path("out.json"))

assert is_passed(5, 100, threshold_pixel=5, threshold_rate=None)

location = S3Location(bucket_name="my-bucket", path_prefix="reports")
report_url = location.report_url(actual_key)
# https://my-bucket.s3.amazonaws.com/reports/<sha>/index.html

payload = build_slack_payload(
    NotifyParams(comparison=result, current_sha=actual_key, report_url=report_url)
)
print(payload["attachments"][0]["color"])  # "danger"
```

To send the payload, await `SlackNotifier(SlackNotifyConfig(webhook_url=...)).notify(params)`
inside an event loop.

## What this package does not do

- It does not compute image differences or render an HTML report. It only models
  results and writes `out.json`.
- It does not talk to S3 or Google Cloud Storage. `S3Location`, `GcsLocation` and
  `prepare_uploads` produce the object keys, content types and gzip bodies. Transfer is
  left to whichever storage client you use.
- It has no notifier that decides when to set commit statuses or post pull-request
  comments. `HttpGitHubClient` only makes the individual API calls.
- It provides no command-line program.