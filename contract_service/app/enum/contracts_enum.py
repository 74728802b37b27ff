from enum import Enum


class DeletePolicy(str, Enum):
    restrict = "restrict"
    cascade = "cascade"


class ContractChildKind(str, Enum):
    asset_schedules = "asset_schedules"
    break_clauses = "break_clauses"
    clauses = "clauses"
    agreed_value_reviews = "agreed_value_reviews"
    guarantees = "guarantees"
    contract_terms = "contract_terms"
    exit_costs = "exit_costs"
    incentives = "incentives"
    initial_costs = "initial_costs"
    make_good_costs = "make_good_costs"
    rate_reviews = "rate_reviews"
    synchronisation_events = "synchronisation_events"
    vendor_histories = "vendor_histories"
    invoices = "invoices"
    invoice_templates = "invoice_templates"
    manual_override_histories = "manual_override_histories"
    lease_accounting_reviews = "lease_accounting_reviews"
    # mappings where this contract is the subordinate
    subcontract_mappings = "subcontract_mappings"
    # mappings where this contract is the parent
    parent_subcontract_mappings = "parent_subcontract_mappings"
