#!/usr/bin/env python3
"""
Product crawling example
Crawls product detail pages and prints variants with prices
"""

import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pagesweep import CrawlerBuilder, CrawlMode

async def main():
    """Product mode crawl with a URL filter"""
    print("🌿 Product Crawling Example")
    print("="*50)

    urls = [
        'https://www.artcrystal.eu/p/1234/crystal-chandelier',
        'https://www.artcrystal.eu/p/1234/crystal-chandelier/',
        'https://www.artcrystal.eu/a/42/how-to-clean-crystal',   # Filtered out
    ]

    pipeline = (CrawlerBuilder()
                .mode(CrawlMode.PRODUCT)
                .url_filter(r'/p/')
                .concurrency(3)
                .with_progress()
                .build())

    report = await pipeline.run(urls, source="example product list")

    for result in report.records:
        product = result.product
        print(f"\n{product.name} ({product.url})")
        for variant in product.variants:
            stock = "in stock" if variant.in_stock else "not in stock"
            print(f"  {variant.attributes} {variant.price_incl_vat} / {variant.price_excl_vat} excl. VAT, {stock}")

    print("\n✅ Product crawling example completed!")

if __name__ == "__main__":
    asyncio.run(main())
