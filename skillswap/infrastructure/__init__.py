"""Infrastructure adapters for SkillSwap."""
