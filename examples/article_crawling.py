#!/usr/bin/env python3
"""
Article crawling example
Extracts article bodies and embedded videos
"""

import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pagesweep import CrawlerBuilder

async def main():
    print("🌿 Article Crawling Example")
    print("="*50)

    urls = [
        'https://www.artcrystal.eu/a/42/how-to-clean-crystal',
    ]

    pipeline = (CrawlerBuilder()
                .mode("article")
                .with_progress()
                .build())

    report = await pipeline.run(urls)

    for article in report.records:
        print(f"\n{article.title} - {len(article.content_text)} chars")
        for embed in article.embeds:
            print(f"  [{embed.type}] {embed.src} {embed.width or ''}x{embed.height or ''}")

    for failure in report.failures:
        print(f"\n❌ {failure.url}: {failure.error_message}")

if __name__ == "__main__":
    asyncio.run(main())
