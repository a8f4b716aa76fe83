"""
Example 01: Basic Seeding

This example demonstrates declaring a small record tree with blueprints and
creating it in memory with RowSeed's Orchestrator.
"""

from row_seed import ConventionEntitySchema, InMemoryRecordStore, Orchestrator, blueprint


def main():
    # Field lists let the schema infer parent links such as Contact.AccountId
    schema = ConventionEntitySchema(
        {
            "Account": ["Name", "Industry"],
            "Contact": ["LastName", "Email", "AccountId"],
        }
    )
    store = InMemoryRecordStore()
    orchestrator = Orchestrator(store, schema)

    print("=== Basic Seeding ===\n")

    tree = (
        blueprint("Account", Name="Acme Corp", Industry="Manufacturing")
        .as_alias("acme")
        .with_children(
            blueprint("Contact", LastName="Doe", Email="doe@acme.example").as_alias("doe"),
        )
    )
    registry = orchestrator.add(tree).create()

    acme = orchestrator.get_by_alias("acme")
    doe = orchestrator.get_by_alias("doe")
    print(f"Account: {acme.id} {dict(acme.fields)}")
    print(f"Contact: {doe.id} {dict(doe.fields)}")
    print(f"Contact links to account: {doe['AccountId'] == acme.id}\n")

    print(f"Registered aliases: {registry.aliases}")
    print(f"Records created: {len(store)}")


if __name__ == "__main__":
    main()
