"""
Example 02: Bulk Creation and Placeholders

This example demonstrates repeating blueprints with times(), numbering them
with {#} and {A}, and naming children after their ancestors with {P0}.
"""

from row_seed import ConventionEntitySchema, InMemoryRecordStore, Orchestrator, blueprint


def main():
    schema = ConventionEntitySchema(
        {
            "Account": ["Name"],
            "Opportunity": ["Name", "StageName", "AccountId"],
        }
    )
    store = InMemoryRecordStore()
    orchestrator = Orchestrator(store, schema)

    print("=== Bulk Creation ===\n")

    # Every account gets its own three opportunities
    tree = (
        blueprint("Account", Name="Account {A}")
        .as_alias("acc{#}")
        .times(2)
        .with_children(
            blueprint("Opportunity", Name="{P0} deal {#}", StageName="Prospecting")
            .as_alias("{P0}-opp{#}")
            .times(3)
        )
    )

    # plan() shows the creation order without touching the store
    for node in orchestrator.add(tree).plan():
        print(f"  planned {node.label}")
    print()

    registry = orchestrator.create()
    for alias, handle in registry.items():
        print(f"  {alias:12} -> {handle.entity_type} {handle.id} {handle.get('Name')}")

    print(f"\nRecords created: {len(store)}")


if __name__ == "__main__":
    main()
