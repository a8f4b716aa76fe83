"""
Example 03: Cross References

This example demonstrates use_ref() to copy values between records, and
how declaration order does not matter: referenced records are created first.
"""

from row_seed import (
    ConventionEntitySchema,
    CycleError,
    InMemoryRecordStore,
    Orchestrator,
    blueprint,
)


def main():
    schema = ConventionEntitySchema(
        {
            "Opportunity": ["Name"],
            "OpportunityLineItem": ["Quantity", "OpportunityId", "PricebookEntryId"],
            "PricebookEntry": ["UnitPrice"],
        }
    )
    orchestrator = Orchestrator(InMemoryRecordStore(), schema)

    print("=== Cross References ===\n")

    # The line items are declared before the price book entry they point at
    opportunity = (
        blueprint("Opportunity", Name="Big Deal")
        .as_alias("deal")
        .with_children(
            blueprint("OpportunityLineItem", Quantity=5)
            .as_alias("{P0}-line{#}")
            .times(2)
            .use_ref("entry", "Id", "PricebookEntryId")
            .use_ref("{P0}", "Name", "Description")
        )
    )
    entry = blueprint("PricebookEntry", UnitPrice=99).as_alias("entry")

    orchestrator.add(opportunity, entry).create()
    print(f"Creation order: {[node.label for node in orchestrator.order]}")

    line = orchestrator.get_by_alias("deal-line1")
    print(f"Line item: {dict(line.fields)}\n")

    print("=== Cycle Detection ===\n")

    cyclic = Orchestrator(InMemoryRecordStore(), schema)
    cyclic.add(
        blueprint("PricebookEntry").as_alias("a").use_ref("b", "Id", "Related"),
        blueprint("PricebookEntry").as_alias("b").use_ref("a", "Id", "Related"),
    )
    try:
        cyclic.create()
    except CycleError as e:
        print(f"Rejected before creating anything: {e}")


if __name__ == "__main__":
    main()
