"""
Seed catalog for demo mode.

Realistic products and reviews across the five catalog categories. Review
timestamps are expressed as "days before dataset construction" so the data
always looks recent. Aggregates are not listed here: the dataset derives
average_rating/review_count from the reviews themselves.
"""

from typing import Any, Dict, List

CATEGORIES = ["Electronics", "Clothing", "Books", "Home & Kitchen", "Sports & Outdoors"]

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": 'MacBook Pro 16"',
        "description": "Powerful laptop with M3 Pro chip, perfect for professionals and creators.",
        "category": "Electronics",
        "price": 2499.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1517336714731-489689fd1ca8?w=400",
            "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=400",
            "https://images.unsplash.com/photo-1541807084-5c52b6b3adef?w=400",
        ],
    },
    {
        "id": 2,
        "name": "Sony WH-1000XM5",
        "description": "Industry-leading noise canceling headphones with exceptional sound quality.",
        "category": "Electronics",
        "price": 399.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=400",
            "https://images.unsplash.com/photo-1484704849701-f408f199234f?w=400",
        ],
    },
    {
        "id": 3,
        "name": "Nike Air Max 270",
        "description": "Comfortable running shoes with excellent cushioning and modern design.",
        "category": "Sports & Outdoors",
        "price": 150.00,
        "image_urls": [
            "https://images.unsplash.com/photo-1549298916-b41d501d3772?w=400",
            "https://images.unsplash.com/photo-1460353581641-37baddab0aa2?w=400",
        ],
    },
    {
        "id": 4,
        "name": "The Great Gatsby",
        "description": "Classic American literature by F. Scott Fitzgerald.",
        "category": "Books",
        "price": 12.99,
        "image_urls": ["https://images.unsplash.com/photo-1544947950-fa07a98d237f?w=400"],
    },
    {
        "id": 5,
        "name": "Instant Pot Duo 7-in-1",
        "description": "Multi-cooker that pressure cooks, slow cooks, rice cooks, and more.",
        "category": "Home & Kitchen",
        "price": 79.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1586548133534-2e3b1f0d0b5b?w=400",
            "https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=400",
        ],
    },
    {
        "id": 6,
        "name": "Levi's 501 Original Jeans",
        "description": "Classic straight-fit jeans, timeless style and durable construction.",
        "category": "Clothing",
        "price": 59.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1542272604-787c3835535d?w=400",
            "https://images.unsplash.com/photo-1515886657613-9f3515b0c78f?w=400",
        ],
    },
    {
        "id": 7,
        "name": "iPad Air",
        "description": "Versatile tablet with M1 chip, perfect for work and entertainment.",
        "category": "Electronics",
        "price": 599.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1544244015-0df4b3ffc6b0?w=400",
            "https://images.unsplash.com/photo-1598928506311-c55ded91e20b?w=400",
        ],
    },
    {
        "id": 8,
        "name": "Yoga Mat Premium",
        "description": "Extra thick, non-slip exercise mat for yoga and fitness routines.",
        "category": "Sports & Outdoors",
        "price": 29.99,
        "image_urls": ["https://images.unsplash.com/photo-1506629905602-85c9cd8c8e3f?w=400"],
    },
    {
        "id": 9,
        "name": "Atomic Habits",
        "description": "Practical guide to building good habits and breaking bad ones.",
        "category": "Books",
        "price": 14.99,
        "image_urls": ["https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400"],
    },
    {
        "id": 10,
        "name": "Coffee Maker Deluxe",
        "description": "Programmable coffee maker with thermal carafe and auto-brew.",
        "category": "Home & Kitchen",
        "price": 89.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?w=400",
            "https://images.unsplash.com/photo-1517668800784-519e8d54d8d7?w=400",
        ],
    },
    {
        "id": 11,
        "name": "Winter Jacket",
        "description": "Warm, waterproof winter jacket with hood and multiple pockets.",
        "category": "Clothing",
        "price": 129.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1551698618-1dfe5d97d256?w=400",
            "https://images.unsplash.com/photo-1541099649105-f69ad21f3246?w=400",
        ],
    },
    {
        "id": 12,
        "name": "Samsung Galaxy Watch",
        "description": "Smartwatch with health tracking, GPS, and smartphone integration.",
        "category": "Electronics",
        "price": 299.99,
        "image_urls": [
            "https://images.unsplash.com/photo-1579313941148-1d9325cd8c94?w=400",
            "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=400",
        ],
    },
]

# product_id -> reviews, newest first
SEED_REVIEWS: Dict[int, List[Dict[str, Any]]] = {
    1: [
        {"id": 101, "reviewer_name": "Alex Chen", "rating": 5, "days_ago": 2, "device_id": "demo-device-001",
         "comment": "Absolutely incredible machine. The M3 Pro chip handles everything I throw at it without breaking a sweat. Battery life is amazing too."},
        {"id": 102, "reviewer_name": "Sarah Johnson", "rating": 4, "days_ago": 5, "device_id": "demo-device-002",
         "comment": "Great laptop overall. The screen is beautiful and performance is stellar. My only complaint is the price, but you get what you pay for."},
        {"id": 103, "reviewer_name": "Mike Wilson", "rating": 5, "days_ago": 12, "device_id": "demo-device-003",
         "comment": None},
        {"id": 104, "reviewer_name": "Emma Davis", "rating": 4, "days_ago": 18, "device_id": "demo-device-004",
         "comment": "Perfect for my development work. The keyboard feels great and the trackpad is precise."},
    ],
    2: [
        {"id": 201, "reviewer_name": "David Lee", "rating": 5, "days_ago": 1, "device_id": "demo-device-005",
         "comment": "Best noise cancellation I've ever experienced. The sound quality is pristine and they're comfortable for long sessions."},
        {"id": 202, "reviewer_name": "Lisa Wang", "rating": 5, "days_ago": 4, "device_id": "demo-device-006",
         "comment": "Worth every penny. I use these for flights and they completely block out engine noise."},
        {"id": 203, "reviewer_name": "Tom Brown", "rating": 4, "days_ago": 10, "device_id": "demo-device-007",
         "comment": "Great sound quality. Battery lasts forever. Only minor issue is they can get a bit warm after extended use."},
    ],
    3: [
        {"id": 301, "reviewer_name": "Chris Martinez", "rating": 4, "days_ago": 3, "device_id": "demo-device-008",
         "comment": "Very comfortable for daily wear. The air max cushioning really makes a difference."},
        {"id": 302, "reviewer_name": "Jordan Taylor", "rating": 5, "days_ago": 7, "device_id": "demo-device-009",
         "comment": "Perfect fit and great style. I wear these everywhere and they still look brand new."},
        {"id": 303, "reviewer_name": "Amy Chen", "rating": 4, "days_ago": 15, "device_id": "demo-device-010",
         "comment": None},
    ],
    4: [
        {"id": 401, "reviewer_name": "Rachel Green", "rating": 5, "days_ago": 6, "device_id": "demo-device-011",
         "comment": "A timeless masterpiece. Fitzgerald's prose is absolutely beautiful. Every time I read it, I discover something new."},
        {"id": 402, "reviewer_name": "Mark Thompson", "rating": 4, "days_ago": 14, "device_id": "demo-device-012",
         "comment": "Classic American literature. The symbolism and themes are still relevant today."},
    ],
    5: [
        {"id": 501, "reviewer_name": "Jennifer Liu", "rating": 5, "days_ago": 2, "device_id": "demo-device-013",
         "comment": "This has revolutionized my cooking! I can make meals in minutes that used to take hours. So versatile."},
        {"id": 502, "reviewer_name": "Robert Kim", "rating": 4, "days_ago": 8, "device_id": "demo-device-014",
         "comment": "Great for busy families. The yogurt function is amazing. Only wish it was a bit larger."},
        {"id": 503, "reviewer_name": "Maria Garcia", "rating": 5, "days_ago": 20, "device_id": "demo-device-015",
         "comment": None},
    ],
    6: [
        {"id": 601, "reviewer_name": "Kevin Park", "rating": 4, "days_ago": 4, "device_id": "demo-device-016",
         "comment": "Classic fit that never goes out of style. The denim quality is excellent."},
        {"id": 602, "reviewer_name": "Sophie Turner", "rating": 4, "days_ago": 11, "device_id": "demo-device-017",
         "comment": "Perfect everyday jeans. They fit true to size and are very comfortable."},
    ],
    7: [
        {"id": 701, "reviewer_name": "Daniel White", "rating": 5, "days_ago": 1, "device_id": "demo-device-018",
         "comment": "Incredibly powerful for a tablet. The M1 chip makes this feel like a laptop replacement."},
        {"id": 702, "reviewer_name": "Olivia Brown", "rating": 5, "days_ago": 9, "device_id": "demo-device-019",
         "comment": "Perfect for drawing and note-taking. The screen is gorgeous and battery life is excellent."},
    ],
    8: [
        {"id": 801, "reviewer_name": "Nina Patel", "rating": 4, "days_ago": 5, "device_id": "demo-device-020",
         "comment": "Great thickness and grip. Doesn't slip even during intense sessions."},
        {"id": 802, "reviewer_name": "Carlos Rodriguez", "rating": 5, "days_ago": 13, "device_id": "demo-device-021",
         "comment": "Best yoga mat I've owned. The extra thickness really helps with my knees."},
    ],
    9: [
        {"id": 901, "reviewer_name": "James Miller", "rating": 5, "days_ago": 3, "device_id": "demo-device-022",
         "comment": "Life-changing book. The practical advice is easy to implement and actually works."},
        {"id": 902, "reviewer_name": "Emily Zhang", "rating": 5, "days_ago": 7, "device_id": "demo-device-023",
         "comment": "This book helped me completely transform my daily routines. Highly recommend!"},
    ],
    10: [
        {"id": 1001, "reviewer_name": "Frank Anderson", "rating": 4, "days_ago": 6, "device_id": "demo-device-024",
         "comment": "Makes great coffee and the thermal carafe keeps it hot for hours. Programming is easy."},
        {"id": 1002, "reviewer_name": "Helen Wong", "rating": 4, "days_ago": 16, "device_id": "demo-device-025",
         "comment": "Good value for the price. Wish the carafe was larger but otherwise very happy."},
    ],
    11: [
        {"id": 1101, "reviewer_name": "Steve Cooper", "rating": 5, "days_ago": 2, "device_id": "demo-device-026",
         "comment": "Kept me warm in -20°C weather. Completely waterproof and well-designed."},
        {"id": 1102, "reviewer_name": "Laura Mitchell", "rating": 4, "days_ago": 8, "device_id": "demo-device-027",
         "comment": "Great jacket for winter. The hood is excellent and pockets are very useful."},
    ],
    12: [
        {"id": 1201, "reviewer_name": "Ryan Foster", "rating": 4, "days_ago": 4, "device_id": "demo-device-028",
         "comment": "Great health tracking features. The GPS is accurate for runs. Battery could be better."},
        {"id": 1202, "reviewer_name": "Michelle Lee", "rating": 4, "days_ago": 12, "device_id": "demo-device-029",
         "comment": "Very stylish and functional. Works seamlessly with my Samsung phone."},
    ],
}
