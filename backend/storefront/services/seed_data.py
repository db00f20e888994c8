"""Demo users and catalogue loaded by the seed endpoint."""

SEED_USERS: list[dict] = [
    {
        "email": "test1@google.com",
        "full_name": "Test One",
        "password": "Abc123",
        "roles": ["admin"],
    },
    {
        "email": "test2@google.com",
        "full_name": "Test Two",
        "password": "Abc123",
        "roles": ["user", "super-user"],
    },
]

SEED_PRODUCTS: list[dict] = [
    {
        "description": "Introducing the Tesla Chill Collection. The Men's Chill Crew Neck Sweatshirt has a premium, heavyweight exterior and soft fleece interior for comfort in any season.",
        "images": ["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
        "stock": 7,
        "price": 75,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "slug": "mens_chill_crew_neck_sweatshirt",
        "tags": ["sweatshirt"],
        "title": "Men's Chill Crew Neck Sweatshirt",
        "gender": "men",
    },
    {
        "description": "The Men's Quilted Shirt Jacket features a uniquely fit, quilted design for warmth and mobility in cold weather seasons.",
        "images": ["1740507-00-A_0_2000.jpg", "1740507-00-A_1.jpg"],
        "stock": 5,
        "price": 200,
        "sizes": ["XS", "S", "M", "XL", "XXL"],
        "slug": "men_quilted_shirt_jacket",
        "tags": ["jacket"],
        "title": "Men's Quilted Shirt Jacket",
        "gender": "men",
    },
    {
        "description": "Designed for fit, comfort and style, the Men's 3D Large Wordmark Tee is made from 100% Peruvian cotton.",
        "images": ["8764734-00-A_0_2000.jpg", "8764734-00-A_1.jpg"],
        "stock": 50,
        "price": 35,
        "sizes": ["XS", "S", "M", "L"],
        "slug": "men_3d_large_wordmark_tee",
        "tags": ["shirt"],
        "title": "Men's 3D Large Wordmark Tee",
        "gender": "men",
    },
    {
        "description": "Introducing the Tesla Raven Collection. The Women's Raven Slouchy Crew Sweatshirt has a premium, relaxed silhouette made from a sustainable bamboo cotton blend.",
        "images": ["1740280-00-A_0_2000.jpg", "1740280-00-A_1.jpg"],
        "stock": 9,
        "price": 110,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "slug": "women_raven_slouchy_crew_sweatshirt",
        "tags": ["hoodie"],
        "title": "Women's Raven Slouchy Crew Sweatshirt",
        "gender": "women",
    },
    {
        "description": "The Kids Cybertruck Long Sleeve Tee features a black-on-black Cybertruck graphic on the front, made from 100% organic cotton.",
        "images": ["1742694-00-A_1_2000.jpg", "1742694-00-A_3.jpg"],
        "stock": 10,
        "price": 30,
        "sizes": ["XS", "S", "M"],
        "slug": "kids_cybertruck_long_sleeve_tee",
        "tags": ["shirt"],
        "title": "Kids Cybertruck Long Sleeve Tee",
        "gender": "kid",
    },
    {
        "description": "The Tesla Unisex Pom Beanie keeps you warm with a soft acrylic knit and a woven Tesla wordmark.",
        "images": ["1657932-00-A_0_2000.jpg", "1657932-00-A_1.jpg"],
        "stock": 15,
        "price": 35,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "slug": "tesla_pom_beanie",
        "tags": ["hats"],
        "title": "Tesla Pom Beanie",
        "gender": "unisex",
    },
]
