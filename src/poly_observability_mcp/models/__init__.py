# Models package
# Tool descriptors, envelopes and configuration models
