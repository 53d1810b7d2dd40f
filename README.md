# disgord

Building blocks for writing Discord bots in Python, using only the standard
library.

## What it offers

- **Rate limit buckets**
  - `disgord.bucket.Bucket` tracks one of Discord's rate limits.
    `Bucket.transaction(do, timeout)` waits for its turn and for any limit to
    reset, runs the request function and updates itself from the response
    headers. It raises `TimeoutError` when the timeout runs out first.
  - `disgord.bucket_manager.BucketManager` hands out buckets per endpoint key.
    It groups keys under the bucket hash Discord reports.
    `bucket_grouping()` shows which keys share a bucket.
- **Headers**
  - `disgord.header.Headers` is a case-insensitive, multi-valued header map.
  - `normalize_discord_header` rewrites the `X-RateLimit-Reset` field as an
    epoch in milliseconds. It can take the delay from `X-RateLimit-Reset-After`
    or from a 429 body.
  - `header_to_time` reads the `date` field.
  - `RateLimitedError` is the error for a rate-limited request.
- **Models**
  - `disgord.message`: `Message`, `User` and `Attachment`.
    - `Message.discord_url()` gives the link to the message.
    - `Message.update_internals()` sets the spoiler flags.
    - `Message.is_direct_message()` tells whether the message came from a
      direct message channel.
  - `disgord.message_parts`: the smaller parts of a message, each with a
    `from_dict` constructor.
  - `disgord.message_types`: the message enums.
  - `disgord.roles`: `Role` and `sort_roles`, which orders roles as Discord
    displays them.
  - `disgord.models`: `Time`, `Discriminator`, `new_discriminator` and
    `extract_attribute`, plus the guild level enums.
  - `disgord.util`: `Snowflake`, `parse_snowflake_string` and `get_snowflake`.
    It also holds `AtomicLock`, `Queue`, `ThreadSafeQueue` and `TicketQueue`.
- **Events**
  - `disgord.events` holds the message related gateway events, such as
    `MessageCreate` and `MessageDeleteBulk`.
  - `copy_msg_evt` deep-copies one of them.
- **Pools**
  - `disgord.pool.Pool` recycles objects that have a `reset()` method.
  - `Pools` keeps a pool each for users and messages.
- **Middlewares**
  - `disgord.std.filters.MsgFilter` offers filters that return the event to
    pass it on, or `None` to stop it:
    - `has_prefix` and `strip_prefix`;
    - `contains_bot_mention` and `has_bot_mention_prefix`;
    - `not_by_bot` and `is_by_bot`;
    - `not_by_webhook` and `is_by_webhook`;
    - `has_permissions`.
  - `disgord.std.logfilter.LogFilter` logs message events through a
    `disgord.logger.Logger`. `EmptyLogger` discards entries; `FmtPrinter`
    prints them.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example: filtering a message event

```python
from disgord.events import MessageCreate
from disgord.message import Message, User
from disgord.std.filters import MsgFilter
from disgord.util import Snowflake

msg_filter = MsgFilter(bot_id=Snowflake(123))
msg_filter.set_prefix("!")

event = MessageCreate(message=Message(content="  !ping", author=User()))
event = msg_filter.not_by_bot(event)
if event is not None:
    event = msg_filter.strip_prefix(event)
print(event.message.content)   # ping
```

## Example: sending through a rate limit bucket

```python
from disgord.bucket_manager import BucketManager
from disgord.header import Headers, Response, normalize_discord_header

manager = BucketManager()

def send():
    # perform the HTTP request here; this stands in for one
    headers = Headers({"X-RateLimit-Bucket": "abc", "X-RateLimit-Remaining": "4",
                       "X-RateLimit-Reset": "1700000000.5"})
    return Response(200, normalize_discord_header(200, headers, None)), b"{}"

manager.bucket("GET:/users/{id}", lambda bucket: bucket.transaction(send, timeout=5))
print(manager.bucket_grouping())   # {'abc': ['GET:/users/{id}']}
```

## What it does not do

This package does not talk to Discord.

- It has no HTTP client. The request function passed to
  `Bucket.transaction` must send the request itself.
- It does not turn endpoints into rate limit keys. The caller chooses the
  keys given to `BucketManager.bucket`.
- It has no gateway connection and no dispatcher that runs handlers for
  events. The filters in `disgord.std` are plain functions for the caller to
  chain.