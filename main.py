#!/usr/bin/env python3
"""
PageSweep
Crawls a list of URLs from one site and extracts structured page records
"""

import asyncio
import sys
from pagesweep import CrawlerBuilder

async def main():
    """Main entry point for the crawler"""
    # Example usage - duplicates and trailing-slash variants are removed
    urls = [
        'https://example.com/',
        'https://example.com',                # Same as above (trailing slash)
        'https://httpbin.org/html',
        'https://httpbin.org/status/404',     # Recorded as a failure
        'https://httpbin.org/html',           # Exact duplicate
    ]

    pipeline = (CrawlerBuilder()
                .concurrency(5)
                .delay_ms(500)
                .timeout_ms(15000)
                .with_progress()
                .with_metrics()
                .with_logging("crawl_data/logs")
                .build())

    report = await pipeline.run(urls, source="main.py example list")

    print("\nPages:")
    for page in report.records:
        print(f"  {page.page_type:<8} {page.word_count:>5} words  {page.url}")

if __name__ == "__main__":
    print("🌿 PageSweep Crawler Starting...")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n🛑 Crawler stopped by user")
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    print("✅ Crawling completed!")
