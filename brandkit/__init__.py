"""
Brand kit wizard: a step-by-step branding package generator.

Modules:
- core: workflow state machine and generated-content model
- prompts: prompt construction for every generation call
- generator: text / structured / image generation gateways
- images: data-URI helpers, image validation and placeholder
- archive: zip packaging of the finished campaign
- languages: supported language table
- config: gateway credentials and model settings
- errors: error kinds reported to the user
"""
