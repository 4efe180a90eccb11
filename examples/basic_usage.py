"""
Basic Usage Example

This example demonstrates the fundamental concepts of weak events:
- Declaring per-instance events on a class
- Subscribing bound methods and plain functions
- Subscribers disappearing once they are garbage collected
- Awaiting async subscribers

Run with: python examples/basic_usage.py
"""

import asyncio
import gc

from weakevents import EventArgs, async_event, event

# =============================================================================
# Step 1: Define Event Payloads
# =============================================================================
# Payloads describe what happened. They are immutable and named in past tense.


class DocumentSaved(EventArgs):
    """Raised after a document is written to disk."""

    path: str
    size: int


class DocumentLoaded(EventArgs):
    """Raised after a document is read from disk."""

    path: str


# =============================================================================
# Step 2: Declare Events on the Publisher
# =============================================================================


class Document:
    """A document that announces saves and loads."""

    saved = event()
    loaded = async_event()

    def __init__(self, path: str) -> None:
        self.path = path
        self.text = ""

    def save(self) -> None:
        self.saved.emit(self, DocumentSaved(path=self.path, size=len(self.text)))

    async def load(self) -> None:
        await self.loaded.emit(self, DocumentLoaded(path=self.path))


# =============================================================================
# Step 3: Subscribers
# =============================================================================


class StatusBar:
    """Short-lived view. The document never keeps it alive."""

    def __init__(self, name: str) -> None:
        self.name = name

    def on_saved(self, sender: Document, args: DocumentSaved) -> None:
        print(f"   [{self.name}] saved {args.path} ({args.size} bytes)")


class Preview:
    async def on_loaded(self, sender: Document, args: DocumentLoaded) -> None:
        await asyncio.sleep(0)
        print(f"   [preview] rendering {args.path}")


def audit(sender: Document, args: DocumentSaved) -> None:
    print(f"   [audit] {args.event_type} id={args.event_id}")


async def main():
    """Demonstrate basic weak event usage."""
    print("=" * 60)
    print("Weak Events Basic Usage Example")
    print("=" * 60)

    document = Document("notes.txt")
    document.text = "hello"

    print("\n1. Subscribing a view and an audit function")
    status_bar = StatusBar("status")
    document.saved += status_bar.on_saved
    document.saved += audit
    document.save()
    print(f"   Subscribers: {document.saved.subscriber_count}")

    print("\n2. Dropping the view without unsubscribing")
    del status_bar
    gc.collect()
    document.save()
    print(f"   Subscribers: {document.saved.subscriber_count}")

    print("\n3. Unsubscribing explicitly")
    document.saved -= audit
    document.save()
    print(f"   Subscribers: {document.saved.subscriber_count}")

    print("\n4. Awaiting async subscribers")
    preview = Preview()
    document.loaded += preview.on_loaded
    await document.load()

    print("\n5. Event statistics:")
    for key, value in document.saved.get_stats().items():
        print(f"   {key}: {value}")

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
