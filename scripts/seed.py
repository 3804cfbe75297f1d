"""Seed script for initial test data."""

import asyncio

from portfolio_service.config import get_settings
from portfolio_service.database import (
    CATEGORY_REQUESTS,
    PORTFOLIOS,
    SKILL_CATEGORIES,
    SKILL_REQUESTS,
    USERS,
    Database,
    init_indexes,
)
from portfolio_service.models.user import User
from portfolio_service.repositories import (
    CategoryRepository,
    CategoryRequestRepository,
    SkillRequestRepository,
    UserRepository,
)
from portfolio_service.services import (
    AccessPolicy,
    CategoryCatalog,
    CategoryRequestWorkflow,
    SkillRequestWorkflow,
)


async def seed_data():
    """Seed the database with users, default categories and sample requests."""
    settings = get_settings()
    await Database.connect()
    gateway = Database.get_gateway()
    await init_indexes(gateway)

    # Clear existing data
    for collection in (USERS, SKILL_CATEGORIES, CATEGORY_REQUESTS, SKILL_REQUESTS, PORTFOLIOS):
        for doc in await gateway.list(collection):
            await gateway.delete(collection, doc["id"])
    print("🧹 Cleared existing data")

    # Create users
    users = [
        {"id": "admin", "email": "admin@portfolio-collection.com", "display_name": "Admin", "role": "admin"},
        {"id": "nadia", "email": "nadia@example.com", "display_name": "Nadia Rahman", "role": "user"},
        {"id": "tomas", "email": "tomas@example.com", "display_name": "Tomas Berg", "role": "user"},
    ]
    for u in users:
        await gateway.create(USERS, {k: v for k, v in u.items() if k != "id"}, doc_id=u["id"])
    print(f"👤 Created {len(users)} users")

    access = AccessPolicy(UserRepository(gateway), settings.admin_email_list)
    catalog = CategoryCatalog(CategoryRepository(gateway), access)
    workflow = CategoryRequestWorkflow(CategoryRequestRepository(gateway), catalog, access)
    skill_workflow = SkillRequestWorkflow(SkillRequestRepository(gateway), catalog, access)

    count = await catalog.seed_defaults()
    print(f"🗂 Created {count} skill categories")

    # Create category requests
    nadia = User(id="nadia", email="nadia@example.com")
    tomas = User(id="tomas", email="tomas@example.com")
    cloud = await workflow.submit_request(nadia, "Cloud Computing", ["AWS", "Azure", "GCP"])
    await workflow.submit_request(tomas, "DevOps", ["Docker", "Kubernetes"])
    hobby = await workflow.submit_request(tomas, "Board Games")
    print("📨 Created 3 category requests")

    await workflow.approve("admin", cloud)
    await workflow.reject("admin", hobby, "Not a professional skill")
    print("✅ Approved 1 request, rejected 1")

    # Create skill requests
    languages = await catalog.find_by_name("Programming Languages")
    rust = await skill_workflow.submit_request(nadia, "Rust", languages.category_id)
    await skill_workflow.submit_request(tomas, "Kotlin", languages.category_id)
    await skill_workflow.approve("admin", rust)
    print("🛠 Created 2 skill requests, approved 1")

    await Database.disconnect()
    print("\n✅ Seed data created successfully!")


if __name__ == "__main__":
    asyncio.run(seed_data())
