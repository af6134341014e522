from zendesk_provider.clients.zendesk.mixins.sla_policies import SLAPolicyClientMixin
from zendesk_provider.clients.zendesk.types import SLAPolicy, SLAPolicyMetric
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import string_in_slice
from zendesk_provider.resources.conditions import (
    condition_schema,
    marshal_conditions,
    unmarshal_conditions,
)

SLA_METRICS = [
    "agent_work_time",
    "first_reply_time",
    "next_reply_time",
    "pausable_update_time",
    "periodic_update_time",
    "requester_wait_time",
]


# https://developer.zendesk.com/api-reference/ticketing/business-rules/sla_policies/
def resource_zendesk_sla_policy() -> Resource:
    return Resource(
        description="Provides an SLA policy resource.",
        create=create_sla_policy,
        read=read_sla_policy,
        update=update_sla_policy,
        delete=delete_sla_policy,
        importer=import_state_passthrough,
        schema={
            "title": Schema(type=ValueType.String, required=True),
            "position": Schema(type=ValueType.Int, computed=True),
            "all": condition_schema("Filters that all need to match."),
            "any": condition_schema("Filters of which at least one needs to match."),
            "policy_metrics": Schema(
                type=ValueType.Set,
                required=True,
                elem=Resource(
                    schema={
                        "priority": Schema(type=ValueType.String, required=True),
                        "metric": Schema(
                            type=ValueType.String,
                            required=True,
                            validate_func=string_in_slice(SLA_METRICS),
                        ),
                        "target": Schema(type=ValueType.Int, required=True),
                        "business_hours": Schema(
                            type=ValueType.Bool, optional=True, default=False
                        ),
                    }
                ),
            ),
            "description": Schema(type=ValueType.String, optional=True, default=""),
        },
    )


def marshal_sla_policy(sla_policy: SLAPolicy, d: ResourceData) -> None:
    fields = {
        "title": sla_policy.title,
        "position": sla_policy.position,
        "description": sla_policy.description,
        "policy_metrics": [
            {
                "priority": metric.priority,
                "metric": metric.metric,
                "target": metric.target,
                "business_hours": metric.business_hours,
            }
            for metric in sla_policy.policy_metrics
        ],
        **marshal_conditions(sla_policy.filter),
    }
    set_schema_fields(d, fields)


def unmarshal_sla_policy(d: ResourceData) -> SLAPolicy:
    sla_policy = SLAPolicy(
        **get_ok_fields(d, "title"),
        description=d.get("description"),
        filter=unmarshal_conditions(d),
        policy_metrics=[
            SLAPolicyMetric(**metric) for metric in d.get("policy_metrics")
        ],
    )
    if d.id:
        sla_policy.id = parse_id(d.id, "SLA policy")
    return sla_policy


async def create_sla_policy(d: ResourceData, zd: SLAPolicyClientMixin) -> None:
    sla_policy = await zd.create_sla_policy(unmarshal_sla_policy(d))
    d.set_id(sla_policy.id)
    marshal_sla_policy(sla_policy, d)


async def read_sla_policy(d: ResourceData, zd: SLAPolicyClientMixin) -> None:
    sla_policy = await zd.get_sla_policy(parse_id(d.id, "SLA policy"))
    marshal_sla_policy(sla_policy, d)


async def update_sla_policy(d: ResourceData, zd: SLAPolicyClientMixin) -> None:
    sla_policy = await zd.update_sla_policy(
        parse_id(d.id, "SLA policy"), unmarshal_sla_policy(d)
    )
    marshal_sla_policy(sla_policy, d)


async def delete_sla_policy(d: ResourceData, zd: SLAPolicyClientMixin) -> None:
    await zd.delete_sla_policy(parse_id(d.id, "SLA policy"))
