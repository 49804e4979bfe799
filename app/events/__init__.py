"""
Events application.

Events are fundraising or informational activities owned by one
organization. Crowdfunding and charity events carry a target amount and
a running raised amount credited by captured donations.

Key components:
    - Event model
    - EventFundingAggregator: the only writer of Event.raised_amount_paise
    - EventService: devotee-facing event listing
"""
